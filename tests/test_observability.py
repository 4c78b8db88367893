import io
import json
from pathlib import Path

from zigcli.observability import StructuredLogger


def test_structured_records_round_through_json_lines(tmp_path: Path) -> None:
    logger = StructuredLogger()
    logger.log(operation="resolve", state="not-started", message="ZIG = zig")
    logger.log(
        operation="execute",
        state="running",
        message="running: zig build",
        extra={"cwd": "/tmp/out"},
    )

    path = logger.to_json_lines(tmp_path / "logs" / "zig.jsonl")

    lines = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [line["operation"] for line in lines] == ["resolve", "execute"]
    assert lines[1]["extra"] == {"cwd": "/tmp/out"}
    assert "extra" not in lines[0]
    assert logger.records_for("execute") == [logger.records[1]]


def test_stream_echoes_messages() -> None:
    stream = io.StringIO()
    logger = StructuredLogger(stream=stream)

    logger.log(operation="execute", message="running: zig build")

    assert stream.getvalue() == "running: zig build\n"
