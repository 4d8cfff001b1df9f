from __future__ import annotations

import json
from pathlib import Path

from webbundle.logging import JsonlBuildLogger


def test_build_log_writes_jsonl_schema(tmp_path: Path) -> None:
    logger = JsonlBuildLogger(tmp_path / "data" / "build.jsonl")

    logger.record("app", "resolve", metadata={"production_path_count": 3})

    lines = logger.path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    event = json.loads(lines[0])

    assert set(event.keys()) == {"action", "bundle", "error_code", "metadata", "ok", "timestamp"}
    assert event["bundle"] == "app"
    assert event["action"] == "resolve"
    assert event["ok"] is True
    assert event["error_code"] is None
    assert event["metadata"] == {"production_path_count": 3}
    assert event["timestamp"].endswith("Z")


def test_failed_event_keeps_error_code(tmp_path: Path) -> None:
    logger = JsonlBuildLogger(tmp_path / "build.jsonl")

    event = logger.record("app", "resolve", ok=False, error_code="MAPPING_ERROR")

    assert event.ok is False
    assert logger.read()[-1]["error_code"] == "MAPPING_ERROR"


def test_read_is_bounded_and_skips_corrupt_lines(tmp_path: Path) -> None:
    logger = JsonlBuildLogger(tmp_path / "build.jsonl")
    for index in range(5):
        logger.record(f"bundle-{index}", "fingerprint")
    with logger.path.open("a", encoding="utf-8") as handle:
        handle.write("{not json\n\n")

    recent = logger.read(limit=2)

    assert [entry["bundle"] for entry in recent] == ["bundle-3", "bundle-4"]
    assert logger.read(limit=0) == []
    assert logger.read(since="9999") == []


def test_read_without_file_returns_empty(tmp_path: Path) -> None:
    logger = JsonlBuildLogger(tmp_path / "missing" / "build.jsonl")

    assert logger.read() == []
