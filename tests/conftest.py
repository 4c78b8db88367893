"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from zigcli.models import BuildConfiguration, Optimize, TargetDescription

from zig_fakes import FakeZig


@pytest.fixture
def fake_zig(monkeypatch: pytest.MonkeyPatch) -> FakeZig:
    fake = FakeZig()
    monkeypatch.setattr("zigcli.executor.subprocess.run", fake)
    return fake


@pytest.fixture
def linux_target() -> TargetDescription:
    return TargetDescription(triple="x86_64-unknown-linux-gnu", optimize=Optimize.RELEASE_FAST)


@pytest.fixture
def package_config(tmp_path: Path) -> BuildConfiguration:
    return BuildConfiguration(
        name="zig_package",
        entrypoint=Path("src/root.zig"),
        output_dir=tmp_path / "zig-out",
        pic=True,
        bundle_compiler_rt=True,
    )
