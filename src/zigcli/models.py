"""Core typed dataclasses describing a zig build and its outcome."""

from __future__ import annotations

import shlex
import warnings
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType

from zigcli import flags
from zigcli.errors import BuildState, UnsupportedConfigurationError
from zigcli.target import TargetTriple


class UnknownOptimizationWarning(UserWarning):
    """Raised when a host optimization level has no zig counterpart."""


class Optimize(StrEnum):
    DEBUG = "debug"
    RELEASE_FAST = "release-fast"
    RELEASE_SAFE = "release-safe"
    RELEASE_SMALL = "release-small"

    @classmethod
    def parse(cls, value: Optimize | str) -> Optimize:
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedConfigurationError(
                f"Unknown optimization mode `{value}`.",
                hint=f"Use one of: {', '.join(mode.value for mode in cls)}.",
                context={"optimize": str(value)},
            ) from None

    @classmethod
    def from_cargo_profile(cls, profile: str, opt_level: str) -> Optimize:
        """Translate Cargo's ``PROFILE`` / ``OPT_LEVEL`` pair."""
        default = cls.DEBUG if profile == "debug" else cls.RELEASE_SAFE
        if profile not in ("debug", "release", "bench"):
            warnings.warn(
                f"Unknown Cargo profile `{profile}`; defaulting to a release build.",
                UnknownOptimizationWarning,
                stacklevel=2,
            )
        if opt_level == "0":
            return cls.DEBUG
        if opt_level in ("1", "2", "3"):
            return cls.RELEASE_SAFE
        if opt_level in ("s", "z"):
            return cls.RELEASE_SMALL
        warnings.warn(
            f"Unknown opt-level `{opt_level}`; defaulting to a {default.value} build.",
            UnknownOptimizationWarning,
            stacklevel=2,
        )
        return default

    @property
    def zig_token(self) -> str:
        try:
            return flags.OPTIMIZE_TOKENS[self.value]
        except KeyError:
            raise UnsupportedConfigurationError(
                f"No zig optimize token for `{self.value}`.",
                context={"optimize": self.value},
            ) from None


@dataclass(frozen=True, slots=True)
class TargetDescription:
    """What the host is building for: triple, optimization and CPU features."""

    triple: str
    optimize: Optimize
    features: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "optimize", Optimize.parse(self.optimize))
        object.__setattr__(
            self,
            "features",
            MappingProxyType(dict(sorted(self.features.items()))),
        )

    @property
    def parsed_triple(self) -> TargetTriple:
        return TargetTriple.parse(self.triple)


@dataclass(frozen=True, slots=True)
class BuildConfiguration:
    """User options layered on top of a :class:`TargetDescription`."""

    name: str
    entrypoint: Path
    output_dir: Path
    pic: bool = False
    bundle_compiler_rt: bool = False
    project_dir: Path | None = None
    options: tuple[str, ...] = ()
    cache_dir: Path | None = None
    global_cache_dir: Path | None = None
    build_file: Path | None = None
    zig_lib_dir: Path | None = None
    dynamic_linker: Path | None = None
    jobs: int | None = None
    verbose: bool = False
    prominent_compile_errors: bool = False
    env: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise UnsupportedConfigurationError("Library name must not be empty.")
        if self.jobs is not None and self.jobs < 1:
            raise UnsupportedConfigurationError(
                "Job count must be positive.",
                context={"jobs": str(self.jobs)},
            )
        for name in ("entrypoint", "output_dir"):
            object.__setattr__(self, name, Path(getattr(self, name)))
        for name in (
            "project_dir",
            "cache_dir",
            "global_cache_dir",
            "build_file",
            "zig_lib_dir",
            "dynamic_linker",
        ):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, Path(value))
        options = tuple(self.options)
        for option in options:
            _check_option(option)
        object.__setattr__(self, "options", options)
        object.__setattr__(self, "env", MappingProxyType(dict(self.env)))

    @property
    def working_dir(self) -> Path:
        return self.project_dir if self.project_dir is not None else self.output_dir

    @property
    def effective_cache_dir(self) -> Path:
        return self.cache_dir if self.cache_dir is not None else self.output_dir / ".zig-cache"


def _check_option(option: str) -> None:
    if not option.startswith(flags.OPTION_PREFIX):
        raise UnsupportedConfigurationError(
            f"Invalid option `{option}`.",
            hint=f"Build options must take the form `{flags.OPTION_PREFIX}name[=value]`.",
            context={"option": option},
        )
    key = option.split("=", 1)[0]
    if key in flags.RESERVED_OPTIONS:
        raise UnsupportedConfigurationError(
            f"Can not set `{key}` through an option.",
            hint=(
                "Use the matching TargetDescription or BuildConfiguration field "
                "(triple, optimize, features, dynamic_linker, pic)."
            ),
            context={"option": option},
        )


@dataclass(frozen=True, slots=True)
class Invocation:
    """A fully formed ``zig build`` command, ready to launch."""

    executable: str
    args: tuple[str, ...]
    cwd: Path
    output_dir: Path
    name: str
    triple: TargetTriple
    env: Mapping[str, str] = field(default_factory=dict)

    @property
    def argv(self) -> tuple[str, ...]:
        return (self.executable, *self.args)

    def display(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True, slots=True)
class BuildResult:
    artifact_path: Path
    invocation: Invocation
    system_libs: tuple[str, ...] = ()
    stdout: str = ""
    stderr: str = ""
    state: BuildState = BuildState.SUCCEEDED

    @property
    def prefix(self) -> Path:
        return self.invocation.output_dir

    @property
    def lib_dir(self) -> Path:
        return self.artifact_path.parent

    @property
    def name(self) -> str:
        return self.invocation.name

    def link_directives(self) -> list[str]:
        """Cargo build-script lines that link the produced library."""
        lines = [
            f"cargo:rustc-link-search=native={self.lib_dir}",
            f"cargo:rustc-link-lib=static={self.name}",
        ]
        lines.extend(f"cargo:rustc-link-lib={lib}" for lib in self.system_libs)
        return lines

    def to_dict(self) -> dict[str, object]:
        return {
            "state": self.state.value,
            "name": self.name,
            "artifact_path": str(self.artifact_path),
            "lib_dir": str(self.lib_dir),
            "prefix": str(self.prefix),
            "system_libs": list(self.system_libs),
            "command": list(self.invocation.argv),
        }
