"""Drive `zig build` from another build system and report what to link."""

from .errors import (
    BuildFailedError,
    BuildState,
    ErrorCode,
    LaunchError,
    MissingArtifactError,
    UnsupportedConfigurationError,
    ZigcliError,
)
from .executor import Executor
from .invocation import build_invocation
from .locator import resolve
from .models import (
    BuildConfiguration,
    BuildResult,
    Invocation,
    Optimize,
    TargetDescription,
    UnknownOptimizationWarning,
)
from .observability import StructuredLogger
from .runner import ZigBuild, build, emit_link_directives
from .target import TargetTriple, to_zig_triple

__all__ = [
    "BuildConfiguration",
    "BuildFailedError",
    "BuildResult",
    "BuildState",
    "ErrorCode",
    "Executor",
    "Invocation",
    "LaunchError",
    "MissingArtifactError",
    "Optimize",
    "StructuredLogger",
    "TargetDescription",
    "TargetTriple",
    "UnknownOptimizationWarning",
    "UnsupportedConfigurationError",
    "ZigBuild",
    "ZigcliError",
    "build",
    "build_invocation",
    "emit_link_directives",
    "resolve",
    "to_zig_triple",
]
