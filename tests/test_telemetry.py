from __future__ import annotations

import json

from telemetry.logger import TelemetryLogger
from telemetry.replay import load_telemetry, summarize_turns


def test_logger_appends_one_json_object_per_line(tmp_path) -> None:
    path = tmp_path / "turns.jsonl"
    telemetry_logger = TelemetryLogger(str(path))
    telemetry_logger.log_turn({"turn": 1, "command": "FORWARD", "accepted": True})
    telemetry_logger.log_turn({"turn": 2, "command": "ROTATE_LEFT", "accepted": True})
    telemetry_logger.close()
    # Dropped once closed
    telemetry_logger.log_turn({"turn": 3})

    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["turn"] for line in lines] == [1, 2]
    assert telemetry_logger.records_written == 2
    assert telemetry_logger.closed


def test_load_telemetry_skips_malformed_lines(tmp_path) -> None:
    path = tmp_path / "turns.jsonl"
    path.write_text(
        '{"turn":1,"accepted":true,"pose":{"x":1,"y":2}}\n'
        "not json\n"
        "\n"
        '{"turn":2,"accepted":false,"pose":{"x":1,"y":2}}\n',
        encoding="utf-8",
    )
    df = load_telemetry(str(path))
    assert len(df) == 2
    assert list(df["pose.x"]) == [1, 1]

    summary = summarize_turns(df)
    assert summary["turns"] == 2
    assert summary["rejected_moves"] == 1
    assert summary["cells_visited"] == 1


def test_missing_log_gives_empty_summary(tmp_path) -> None:
    df = load_telemetry(str(tmp_path / "nope.jsonl"))
    assert df.empty
    assert summarize_turns(df) == {"turns": 0, "rejected_moves": 0, "cells_visited": 0, "commands": {}}


def test_summary_ignores_records_without_pose(tmp_path) -> None:
    path = tmp_path / "turns.jsonl"
    path.write_text(
        '{"turn":1,"accepted":true,"before":{"x":0,"y":0},"pose":{"x":1,"y":0}}\n'
        '{"turn":2,"note":"no pose here"}\n'
        '{"turn":3,"accepted":false,"pose":{"x":1,"y":0}}\n',
        encoding="utf-8",
    )
    summary = summarize_turns(load_telemetry(str(path)))
    assert summary["turns"] == 3
    assert summary["rejected_moves"] == 1
    assert summary["cells_visited"] == 2
