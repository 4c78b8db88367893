import json
from pathlib import Path

import pytest

from zigcli.cli import main

from zig_fakes import FakeZig


def _args(tmp_path: Path, *extra: str) -> list[str]:
    return [
        "--name",
        "zig_package",
        "--entrypoint",
        "src/root.zig",
        "--out-dir",
        str(tmp_path / "zig-out"),
        "--target",
        "aarch64-unknown-linux-musl",
        *extra,
    ]


def test_cli_prints_artifact_path(
    fake_zig: FakeZig,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.delenv("ZIG", raising=False)
    fake_zig.install = ("lib/libzig_package.a",)

    code = main(_args(tmp_path, "--optimize", "release-small", "--pic", "-Dstrip=true"))

    assert code == 0
    out = capsys.readouterr().out
    assert out.strip() == str(tmp_path / "zig-out" / "lib" / "libzig_package.a")
    argv = fake_zig.calls[0]["argv"]
    assert "-Dtarget=aarch64-linux-musl" in argv
    assert "-Doptimize=ReleaseSmall" in argv
    assert "-Dpic" in argv
    assert "-Dstrip=true" in argv


def test_cli_json_and_features(
    fake_zig: FakeZig,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    fake_zig.install = ("lib/libzig_package.a",)

    code = main(
        _args(
            tmp_path,
            "--enable-feature",
            "neon",
            "--disable-feature=crc",
            "--format",
            "json",
        )
    )

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["state"] == "succeeded"
    assert payload["name"] == "zig_package"
    assert "-Dcpu=baseline-crc+neon" in payload["command"]


def test_cli_build_failure_echoes_tool_stderr(
    fake_zig: FakeZig,
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    fake_zig.returncode = 1
    fake_zig.stderr = "root.zig:1:1: error: nope\n"
    log_file = tmp_path / "log" / "build.jsonl"

    code = main(_args(tmp_path, "--log-file", str(log_file)))

    assert code == 1
    err = capsys.readouterr().err
    assert err.startswith("root.zig:1:1: error: nope\n")
    assert "E_BUILD" in err
    states = [json.loads(line)["state"] for line in log_file.read_text().splitlines()]
    assert states[-1] == "failed-exit"


def test_cli_rejects_reserved_option(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
) -> None:
    code = main(_args(tmp_path, "-Doptimize=Debug"))

    assert code == 1
    assert "E_UNSUPPORTED_CONFIGURATION" in capsys.readouterr().err


def test_cli_feature_flags_take_separate_values(
    fake_zig: FakeZig,
    tmp_path: Path,
) -> None:
    fake_zig.install = ("lib/libzig_package.a",)

    code = main(
        _args(
            tmp_path,
            "--disable-feature",
            "avx2",
            "--enable-feature",
            "fp-armv8",
            "--enable-feature",
            "avx2",
        )
    )

    assert code == 0
    assert "-Dcpu=baseline-avx2+fp_armv8" in fake_zig.calls[0]["argv"]


def test_cli_feature_flag_requires_a_name(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        main(_args(tmp_path, "--enable-feature"))


def test_cli_passes_toolchain_flags(
    fake_zig: FakeZig,
    tmp_path: Path,
) -> None:
    fake_zig.install = ("lib/libzig_package.a",)
    lib_dir = tmp_path / "zig-lib"

    code = main(
        _args(
            tmp_path,
            "--zig-lib-dir",
            str(lib_dir),
            "--dynamic-linker",
            "/lib/ld-musl-aarch64.so.1",
            "--prominent-compile-errors",
        )
    )

    assert code == 0
    argv = fake_zig.calls[0]["argv"]
    assert argv[argv.index("--zig-lib-dir") + 1] == str(lib_dir)
    assert "-Ddynamic-linker=/lib/ld-musl-aarch64.so.1" in argv
    assert argv[-1] == "--prominent-compile-errors"
