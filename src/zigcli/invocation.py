"""Translate a target description and build configuration into `zig build`."""

from __future__ import annotations

from collections.abc import Mapping

from zigcli import flags
from zigcli.models import BuildConfiguration, Invocation, Optimize, TargetDescription
from zigcli.target import TargetTriple, translate_cpu_feature


def build_invocation(
    tool: str,
    target: TargetDescription,
    config: BuildConfiguration,
) -> Invocation:
    """Return the command line for one build.

    Pure: the same inputs always give the same argument tuple and nothing
    on disk is inspected.
    """
    triple = TargetTriple.parse(target.triple)
    args: list[str] = [
        flags.BUILD_SUBCOMMAND,
        flags.PREFIX,
        str(config.output_dir),
        str(config.entrypoint),
        flags.option(flags.TARGET_OPTION, triple.to_zig()),
        flags.option(flags.OPTIMIZE_OPTION, optimize_token(target.optimize)),
    ]
    if config.pic:
        args.append(flags.PIC_OPTION)
    if config.bundle_compiler_rt:
        args.append(flags.BUNDLE_COMPILER_RT)

    cpu = cpu_option(triple, target.features)
    if cpu is not None:
        args.append(flags.option(flags.CPU_OPTION, cpu))
    if config.dynamic_linker is not None:
        args.append(flags.option(flags.DYNAMIC_LINKER_OPTION, str(config.dynamic_linker)))
    args.extend(config.options)

    args.extend((flags.CACHE_DIR, str(config.effective_cache_dir)))
    if config.global_cache_dir is not None:
        args.extend((flags.GLOBAL_CACHE_DIR, str(config.global_cache_dir)))
    if config.build_file is not None:
        args.extend((flags.BUILD_FILE, str(config.build_file)))
    if config.zig_lib_dir is not None:
        args.extend((flags.ZIG_LIB_DIR, str(config.zig_lib_dir)))
    if config.jobs is not None:
        args.append(flags.jobs(config.jobs))
    if config.verbose:
        args.append(flags.VERBOSE)
    if config.prominent_compile_errors:
        args.append(flags.PROMINENT_COMPILE_ERRORS)

    return Invocation(
        executable=tool,
        args=tuple(args),
        cwd=config.working_dir,
        output_dir=config.output_dir,
        name=config.name,
        triple=triple,
        env=config.env,
    )


def optimize_token(mode: Optimize | str) -> str:
    return Optimize.parse(mode).zig_token


def cpu_option(triple: TargetTriple, features: Mapping[str, bool]) -> str | None:
    """Render ``-Dcpu`` as ``baseline+enabled-disabled``, or None without toggles."""
    if not features:
        return None
    parts = [flags.CPU_BASELINE]
    for feature, enabled in sorted(features.items()):
        sign = "+" if enabled else "-"
        parts.append(f"{sign}{translate_cpu_feature(triple.arch, feature)}")
    return "".join(parts)
