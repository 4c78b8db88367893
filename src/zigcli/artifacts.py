"""Artifact naming and extra link libraries per target OS.

These mirror the install layout of ``b.installArtifact`` for a static
library at the time of writing. If zig changes where it installs libraries,
this is the module to update.
"""

from __future__ import annotations

from pathlib import Path

from zigcli.target import APPLE_OSES, BSD_OSES, TargetTriple

LIB_SUBDIR = "lib"

# OSes whose static libraries use the COFF naming scheme.
COFF_OSES = frozenset({"windows", "uefi"})

SYSTEM_LIBRARIES: dict[str, tuple[str, ...]] = {
    "windows": ("kernel32", "ntdll"),
    **{os_name: ("System",) for os_name in APPLE_OSES},
    **{os_name: ("c",) for os_name in BSD_OSES},
}

ANDROID_LIBRARIES = ("c", "log")


def static_library_name(name: str, triple: TargetTriple) -> str:
    if triple.zig_os in COFF_OSES:
        return f"{name}.lib"
    return f"lib{name}.a"


def expected_artifact_path(output_dir: Path, name: str, triple: TargetTriple) -> Path:
    return output_dir / LIB_SUBDIR / static_library_name(name, triple)


def system_libraries(triple: TargetTriple) -> tuple[str, ...]:
    if triple.env.startswith("android"):
        return ANDROID_LIBRARIES
    return SYSTEM_LIBRARIES.get(triple.zig_os or "", ())


def find_candidates(output_dir: Path, name: str) -> list[Path]:
    """Library-looking files anywhere under ``output_dir`` for diagnostics."""
    if not output_dir.is_dir():
        return []
    names = {f"lib{name}.a", f"{name}.lib", f"{name}.a", f"lib{name}.lib"}
    return sorted(
        path
        for path in output_dir.rglob("*")
        if path.is_file() and path.name in names and ".zig-cache" not in path.parts
    )
