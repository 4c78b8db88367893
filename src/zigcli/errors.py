"""Typed error model with stable, machine-readable error codes."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import StrEnum
from pathlib import Path


class ErrorCode(StrEnum):
    """Stable error identifiers surfaced to host build systems."""

    LAUNCH = "E_LAUNCH"
    BUILD = "E_BUILD"
    MISSING_ARTIFACT = "E_MISSING_ARTIFACT"
    UNSUPPORTED_CONFIGURATION = "E_UNSUPPORTED_CONFIGURATION"


class BuildState(StrEnum):
    """Lifecycle of a single `zig build` invocation."""

    NOT_STARTED = "not-started"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED_EXIT = "failed-exit"
    FAILED_MISSING_ARTIFACT = "failed-missing-artifact"
    FAILED_LAUNCH = "failed-launch"

    @property
    def terminal(self) -> bool:
        return self not in (BuildState.NOT_STARTED, BuildState.RUNNING)


class ZigcliError(Exception):
    """Base error class that carries code, optional hint, and context."""

    code: str
    hint: str | None
    context: Mapping[str, str]
    state: BuildState | None = None

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code.value
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.hint:
            parts.append(f"Hint: {self.hint}")
        if self.context:
            for k, v in self.context.items():
                if v:
                    parts.append(f"  {k}: {v}")
        return "\n".join(parts)

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "code": self.code,
            "message": str(self),
            "context": dict(self.context),
        }
        if self.hint is not None:
            payload["hint"] = self.hint
        if self.state is not None:
            payload["state"] = self.state.value
        return payload


class LaunchError(ZigcliError):
    """The zig executable could not be found or started."""

    state = BuildState.FAILED_LAUNCH

    def __init__(
        self,
        message: str,
        *,
        executable: str,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.LAUNCH,
            hint=hint,
            context={"executable": executable, **(context or {})},
        )
        self.executable = executable


class BuildFailedError(ZigcliError):
    """zig ran and exited with a non-zero status.

    ``stdout`` and ``stderr`` hold the captured output exactly as the tool
    wrote it.
    """

    state = BuildState.FAILED_EXIT

    def __init__(
        self,
        message: str,
        *,
        returncode: int,
        stdout: str,
        stderr: str,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.BUILD,
            hint=hint,
            context={
                **(context or {}),
                "returncode": str(returncode),
                "stdout": stdout,
                "stderr": stderr,
            },
        )
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class MissingArtifactError(ZigcliError):
    """zig reported success but the expected library is not where it should be."""

    state = BuildState.FAILED_MISSING_ARTIFACT

    def __init__(
        self,
        message: str,
        *,
        expected_path: Path,
        candidates: Sequence[Path] = (),
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.MISSING_ARTIFACT,
            hint=hint,
            context={
                **(context or {}),
                "expected_path": str(expected_path),
                "candidates": ", ".join(str(path) for path in candidates),
            },
        )
        self.expected_path = expected_path
        self.candidates = tuple(candidates)


class UnsupportedConfigurationError(ZigcliError, ValueError):
    """Inconsistent build description, raised before anything is launched."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        context: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            message,
            code=ErrorCode.UNSUPPORTED_CONFIGURATION,
            hint=hint,
            context=context,
        )


__all__ = [
    "BuildFailedError",
    "BuildState",
    "ErrorCode",
    "LaunchError",
    "MissingArtifactError",
    "UnsupportedConfigurationError",
    "ZigcliError",
]
