import io
from pathlib import Path

import pytest

import zigcli
from zigcli.errors import LaunchError
from zigcli.models import BuildConfiguration, TargetDescription
from zigcli.observability import StructuredLogger
from zigcli.runner import ZigBuild, emit_link_directives

from zig_fakes import FakeZig


def test_end_to_end_linux_package(
    fake_zig: FakeZig,
    linux_target: TargetDescription,
    package_config: BuildConfiguration,
) -> None:
    fake_zig.install = ("lib/libzig_package.a",)
    out_dir = package_config.output_dir

    result = zigcli.build(linux_target, package_config, environ={})

    argv = fake_zig.calls[0]["argv"]
    assert argv[:9] == [
        "zig",
        "build",
        "--prefix",
        str(out_dir),
        "src/root.zig",
        "-Dtarget=x86_64-linux-gnu",
        "-Doptimize=ReleaseFast",
        "-Dpic",
        "--bundle-compiler-rt",
    ]
    assert result.artifact_path == out_dir / "lib" / "libzig_package.a"
    assert result.system_libs == ()


def test_zig_override_is_used_for_launch(
    fake_zig: FakeZig,
    linux_target: TargetDescription,
    package_config: BuildConfiguration,
) -> None:
    fake_zig.install = ("lib/libzig_package.a",)

    zigcli.build(linux_target, package_config, environ={"ZIG": "/opt/zig-0.13/zig"})

    assert fake_zig.calls[0]["argv"][0] == "/opt/zig-0.13/zig"


def test_invocation_is_recomputed_per_run(
    fake_zig: FakeZig,
    linux_target: TargetDescription,
    package_config: BuildConfiguration,
) -> None:
    fake_zig.install = ("lib/libzig_package.a",)
    environ = {"ZIG": "zig-a"}
    runner = ZigBuild(target=linux_target, config=package_config, environ=environ)

    runner.run()
    environ["ZIG"] = "zig-b"
    runner.run()

    assert [call["argv"][0] for call in fake_zig.calls] == ["zig-a", "zig-b"]


def test_logger_records_resolution_and_states(
    fake_zig: FakeZig,
    linux_target: TargetDescription,
    package_config: BuildConfiguration,
) -> None:
    fake_zig.install = ("lib/libzig_package.a",)
    logger = StructuredLogger()

    zigcli.build(linux_target, package_config, environ={}, logger=logger)

    assert logger.records_for("resolve")[0]["message"] == "ZIG = zig"
    assert logger.states() == ["not-started", "running", "succeeded"]


def test_launch_failure_propagates(
    tmp_path: Path,
    linux_target: TargetDescription,
    package_config: BuildConfiguration,
) -> None:
    with pytest.raises(LaunchError):
        zigcli.build(linux_target, package_config, environ={"ZIG": str(tmp_path / "nope")})


def test_emit_link_directives(
    fake_zig: FakeZig,
    package_config: BuildConfiguration,
) -> None:
    fake_zig.install = ("lib/libzig_package.a",)
    target = TargetDescription("x86_64-unknown-freebsd", "release-safe")
    stream = io.StringIO()

    emit_link_directives(zigcli.build(target, package_config, environ={}), stream)

    assert stream.getvalue().splitlines() == [
        f"cargo:rustc-link-search=native={package_config.output_dir / 'lib'}",
        "cargo:rustc-link-lib=static=zig_package",
        "cargo:rustc-link-lib=c",
    ]
