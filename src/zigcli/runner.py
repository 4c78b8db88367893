"""One-shot orchestration: locate zig, build the command line, run it."""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TextIO

from zigcli import locator
from zigcli.errors import BuildState
from zigcli.executor import Executor
from zigcli.invocation import build_invocation
from zigcli.models import BuildConfiguration, BuildResult, Invocation, TargetDescription
from zigcli.observability import StructuredLogger


@dataclass(slots=True)
class ZigBuild:
    target: TargetDescription
    config: BuildConfiguration
    environ: Mapping[str, str] | None = None
    logger: StructuredLogger = field(default_factory=StructuredLogger)
    executor: Executor | None = None

    def invocation(self) -> Invocation:
        tool = locator.resolve(self.environ)
        self.logger.log(
            operation="resolve",
            state=BuildState.NOT_STARTED.value,
            message=f"{locator.ZIG_ENV_VAR} = {tool}",
        )
        return build_invocation(tool, self.target, self.config)

    def run(self) -> BuildResult:
        executor = self.executor or Executor(logger=self.logger)
        return executor.run(self.invocation())


def build(
    target: TargetDescription,
    config: BuildConfiguration,
    *,
    environ: Mapping[str, str] | None = None,
    logger: StructuredLogger | None = None,
) -> BuildResult:
    """Build ``config`` for ``target`` and return where the library landed.

    Example, from a build script::

        result = zigcli.build(
            TargetDescription("x86_64-unknown-linux-gnu", Optimize.RELEASE_FAST),
            BuildConfiguration(
                name="zig_package",
                entrypoint=Path("src/root.zig"),
                output_dir=out_dir / "zig-out",
                pic=True,
                bundle_compiler_rt=True,
            ),
        )
        emit_link_directives(result)
    """
    return ZigBuild(
        target=target,
        config=config,
        environ=environ,
        logger=logger or StructuredLogger(),
    ).run()


def emit_link_directives(result: BuildResult, stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    for line in result.link_directives():
        print(line, file=out)
