"""Spellings of the `zig build` command line.

The zig CLI is not stable across releases; everything zigcli passes on the
command line is spelled here and nowhere else.
"""

from __future__ import annotations

BUILD_SUBCOMMAND = "build"

PREFIX = "--prefix"
CACHE_DIR = "--cache-dir"
GLOBAL_CACHE_DIR = "--global-cache-dir"
BUILD_FILE = "--build-file"
ZIG_LIB_DIR = "--zig-lib-dir"
VERBOSE = "--verbose"
PROMINENT_COMPILE_ERRORS = "--prominent-compile-errors"
BUNDLE_COMPILER_RT = "--bundle-compiler-rt"

TARGET_OPTION = "-Dtarget"
OPTIMIZE_OPTION = "-Doptimize"
CPU_OPTION = "-Dcpu"
DYNAMIC_LINKER_OPTION = "-Ddynamic-linker"
PIC_OPTION = "-Dpic"

OPTION_PREFIX = "-D"

# Options zigcli derives itself; callers may not pass them through `options`.
RESERVED_OPTIONS = (
    TARGET_OPTION,
    CPU_OPTION,
    DYNAMIC_LINKER_OPTION,
    OPTIMIZE_OPTION,
    PIC_OPTION,
)

# Host optimization mode value -> zig `-Doptimize` token.
OPTIMIZE_TOKENS = {
    "debug": "Debug",
    "release-fast": "ReleaseFast",
    "release-safe": "ReleaseSafe",
    "release-small": "ReleaseSmall",
}

CPU_BASELINE = "baseline"


def option(name: str, value: str) -> str:
    return f"{name}={value}"


def jobs(count: int) -> str:
    return f"-j{count}"
