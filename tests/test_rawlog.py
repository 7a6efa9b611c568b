from __future__ import annotations

from pathlib import Path

import pytest

from pysbahn.exceptions import RawLogError
from pysbahn.rawlog import RawLog, read_frames


def test_appends_across_runs(tmp_path: Path) -> None:
    path = tmp_path / "feed.jsonl"

    with RawLog(path) as log:
        log.append('{"a": 1}')
    with RawLog(path) as log:
        log.append('{"b": 2}')
        assert log.written == 1

    assert path.read_text(encoding="utf-8") == '{"a": 1}\n{"b": 2}\n'


def test_frames_are_written_verbatim(tmp_path: Path) -> None:
    path = tmp_path / "feed.jsonl"
    frame = '{"source":  "websocket", "content": "PONG", "timestamp": 1}'

    with RawLog(path) as log:
        log.append(frame)

    assert list(read_frames(path)) == [(1, frame)]


def test_append_requires_open(tmp_path: Path) -> None:
    log = RawLog(tmp_path / "feed.jsonl")

    with pytest.raises(RawLogError):
        log.append("{}")


def test_open_failure(tmp_path: Path) -> None:
    with pytest.raises(RawLogError):
        RawLog(tmp_path / "missing" / "feed.jsonl").open()


def test_read_frames_skips_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "feed.jsonl"
    path.write_text("first\n\nthird\r\n", encoding="utf-8")

    assert list(read_frames(path)) == [(1, "first"), (3, "third")]


def test_read_frames_missing_file(tmp_path: Path) -> None:
    with pytest.raises(RawLogError):
        list(read_frames(tmp_path / "absent.jsonl"))
