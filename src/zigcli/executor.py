"""Run a `zig build` invocation and resolve the library it installed.

Execution is synchronous and single-shot: the calling thread blocks until
zig exits, nothing is retried and no timeout is applied. Every run ends in
exactly one terminal :class:`~zigcli.errors.BuildState`; all but
``succeeded`` are raised as the matching :class:`~zigcli.errors.ZigcliError`.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field

from zigcli.artifacts import expected_artifact_path, find_candidates, system_libraries
from zigcli.errors import (
    BuildFailedError,
    BuildState,
    LaunchError,
    MissingArtifactError,
    ZigcliError,
)
from zigcli.locator import ZIG_ENV_VAR
from zigcli.models import BuildResult, Invocation
from zigcli.observability import StructuredLogger


@dataclass(slots=True)
class Executor:
    logger: StructuredLogger = field(default_factory=StructuredLogger)

    def run(self, invocation: Invocation) -> BuildResult:
        try:
            return self._run(invocation)
        except ZigcliError as exc:
            self.logger.log(
                operation="execute",
                state=exc.state.value if exc.state is not None else None,
                level="error",
                message=str(exc).splitlines()[0],
                extra={"code": exc.code},
            )
            raise

    def _run(self, invocation: Invocation) -> BuildResult:
        invocation.output_dir.mkdir(parents=True, exist_ok=True)
        env = dict(os.environ)
        env.update(invocation.env)

        command = invocation.display()
        self.logger.log(
            operation="execute",
            state=BuildState.RUNNING.value,
            message=f"running: {command}",
            extra={"cwd": str(invocation.cwd)},
        )
        try:
            result = subprocess.run(
                list(invocation.argv),
                cwd=str(invocation.cwd),
                env=env,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="surrogateescape",
                check=False,
            )
        except OSError as exc:
            raise LaunchError(
                f"Failed to execute `{invocation.executable}`: {exc}",
                executable=invocation.executable,
                hint=f"Is zig installed? Put it on PATH or set ${ZIG_ENV_VAR}.",
                context={"command": command, "cwd": str(invocation.cwd)},
            ) from exc

        if result.returncode != 0:
            raise BuildFailedError(
                "zig build failed.",
                returncode=result.returncode,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
                hint="Check the zig output above and the build configuration.",
                context={"command": command},
            )

        artifact_path = expected_artifact_path(
            invocation.output_dir,
            invocation.name,
            invocation.triple,
        )
        if not artifact_path.is_file():
            raise MissingArtifactError(
                "zig build succeeded but did not install the expected library.",
                expected_path=artifact_path,
                candidates=find_candidates(invocation.output_dir, invocation.name),
                hint=(
                    "Make sure build.zig installs a static library named "
                    f"`{invocation.name}`; the zig install layout may have changed."
                ),
                context={"command": command},
            )

        build_result = BuildResult(
            artifact_path=artifact_path,
            invocation=invocation,
            system_libs=system_libraries(invocation.triple),
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )
        self.logger.log(
            operation="execute",
            state=BuildState.SUCCEEDED.value,
            message=f"built {artifact_path}",
            extra={"system_libs": list(build_result.system_libs)},
        )
        return build_result
