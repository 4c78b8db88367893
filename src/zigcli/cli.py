"""Command-line entry point for host build systems that are not Python."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from zigcli.errors import BuildFailedError, ZigcliError
from zigcli.models import BuildConfiguration, Optimize, TargetDescription
from zigcli.observability import StructuredLogger
from zigcli.runner import ZigBuild


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zigcli",
        description="Build a static library with `zig build` and report how to link it.",
    )
    parser.add_argument("--name", required=True, help="Library name as declared in build.zig")
    parser.add_argument("--entrypoint", required=True, type=Path, help="Root source file")
    parser.add_argument("--out-dir", required=True, type=Path, help="Install prefix")
    parser.add_argument("--target", required=True, help="Host target triple")
    parser.add_argument(
        "--optimize",
        default=Optimize.DEBUG.value,
        choices=[mode.value for mode in Optimize],
    )
    parser.add_argument(
        "--enable-feature",
        action="append",
        default=[],
        metavar="NAME",
        help="Enable a CPU feature (repeatable)",
    )
    parser.add_argument(
        "--disable-feature",
        action="append",
        default=[],
        metavar="NAME",
        help="Disable a CPU feature (repeatable, wins over --enable-feature)",
    )
    parser.add_argument("--pic", action="store_true", help="Emit position-independent code")
    parser.add_argument(
        "--bundle-compiler-rt",
        action="store_true",
        help="Bundle compiler-rt into the library",
    )
    parser.add_argument(
        "-D",
        dest="options",
        action="append",
        default=[],
        metavar="OPTION[=VALUE]",
        help="Extra build.zig option (repeatable)",
    )
    parser.add_argument("--project-dir", type=Path, default=None)
    parser.add_argument("--cache-dir", type=Path, default=None)
    parser.add_argument("--global-cache-dir", type=Path, default=None)
    parser.add_argument("--build-file", type=Path, default=None)
    parser.add_argument("--zig-lib-dir", type=Path, default=None)
    parser.add_argument("--dynamic-linker", type=Path, default=None)
    parser.add_argument("-j", "--jobs", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--prominent-compile-errors", action="store_true")
    parser.add_argument(
        "--format",
        choices=("text", "json", "cargo"),
        default="text",
        help="How to print the result",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write JSON-lines build log")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger = StructuredLogger(stream=sys.stderr if args.verbose else None)
    features = {name: True for name in args.enable_feature}
    features.update({name: False for name in args.disable_feature})
    try:
        target = TargetDescription(
            triple=args.target,
            optimize=Optimize.parse(args.optimize),
            features=features,
        )
        config = BuildConfiguration(
            name=args.name,
            entrypoint=args.entrypoint,
            output_dir=args.out_dir,
            pic=args.pic,
            bundle_compiler_rt=args.bundle_compiler_rt,
            project_dir=args.project_dir,
            options=tuple(f"-D{option}" for option in args.options),
            cache_dir=args.cache_dir,
            global_cache_dir=args.global_cache_dir,
            build_file=args.build_file,
            zig_lib_dir=args.zig_lib_dir,
            dynamic_linker=args.dynamic_linker,
            jobs=args.jobs,
            verbose=args.verbose,
            prominent_compile_errors=args.prominent_compile_errors,
        )
        result = ZigBuild(target=target, config=config, logger=logger).run()
    except BuildFailedError as exc:
        sys.stderr.write(exc.stderr)
        print(f"error[{exc.code}]: {str(exc).splitlines()[0]}", file=sys.stderr)
        return 1
    except ZigcliError as exc:
        print(f"error[{exc.code}]: {exc}", file=sys.stderr)
        return 1
    finally:
        if args.log_file is not None:
            logger.to_json_lines(args.log_file)

    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2, sort_keys=True))
    elif args.format == "cargo":
        for line in result.link_directives():
            print(line)
    else:
        print(result.artifact_path)
        for lib in result.system_libs:
            print(f"link: {lib}")
    return 0
