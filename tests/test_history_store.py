# tests/test_history_store.py

from __future__ import annotations

import re
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from queue_timer.cli.history_view import show_history
from queue_timer.tasks.history_store import HistoryStore
from queue_timer.tasks.task_models import Task

from .fakes import FakeHistory

TS_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")


def test_append_writes_one_delimited_line(history_store: HistoryStore) -> None:
    history_store.append(Task(name="Focus", duration=timedelta(seconds=90)))

    lines = history_store.path.read_text("utf-8").splitlines()
    assert len(lines) == 1
    name, duration, ts = lines[0].split("|")
    assert name == "Focus"
    assert duration == "1m30s"
    assert TS_RE.match(ts)


def test_round_trip(history_store: HistoryStore) -> None:
    when = datetime(2024, 3, 9, 14, 5, 7)
    written = history_store.append(Task(name="Focus", duration=timedelta(seconds=90)), when)

    records = history_store.read_records()
    assert records == [written]
    assert records[0].timestamp == "2024-03-09 14:05:07"


def test_append_keeps_existing_records(history_store: HistoryStore) -> None:
    history_store.append(Task(name="A", duration=timedelta(seconds=1)))
    history_store.append(Task(name="B", duration=timedelta(hours=1, seconds=5)))

    assert [(r.name, r.duration) for r in history_store.read_records()] == [
        ("A", "1s"),
        ("B", "1h0m5s"),
    ]


def test_append_creates_parent_directories(tmp_path: Path) -> None:
    store = HistoryStore(tmp_path / "nested" / "dir" / "history.log")
    store.append(Task(name="A", duration=timedelta(seconds=1)))
    assert store.path.exists()


def test_malformed_lines_are_skipped(tmp_path: Path) -> None:
    path = tmp_path / "history.log"
    path.write_text(
        "ok|5s|2024-01-01 00:00:00\n"
        "garbage line\n"
        "too|many|fields|here\n"
        "\n"
        "also ok|1m0s|2024-01-02 00:00:00\n",
        "utf-8",
    )

    records = HistoryStore(path).read_records()
    assert [r.name for r in records] == ["ok", "also ok"]


def test_missing_file_raises_file_not_found(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        HistoryStore(tmp_path / "nope.log").read_records()


def test_show_history_missing_file(tmp_path: Path, output) -> None:
    assert show_history(HistoryStore(tmp_path / "nope.log"), output) is True
    assert output.lines == ["No history available"]


def test_show_history_prints_labelled_blocks(history_store: HistoryStore, output) -> None:
    history_store.append(Task(name="Focus", duration=timedelta(seconds=90)), datetime(2024, 1, 2, 3, 4, 5))

    assert show_history(history_store, output) is True
    assert "Task History:" in output.lines
    assert "Task: Focus\nDuration: 1m30s\nCompleted: 2024-01-02 03:04:05\n" in output.lines


def test_show_history_reports_read_errors(tmp_path: Path, output) -> None:
    # A directory where the file should be -> IsADirectoryError (an OSError).
    path = tmp_path / "history.log"
    path.mkdir()

    assert show_history(HistoryStore(path), output) is False
    assert output.lines[0].startswith("Error showing history: ")


def test_non_utf8_bytes_are_read_back_and_shown(tmp_path: Path, output) -> None:
    path = tmp_path / "history.log"
    path.write_bytes(b"caf\xe9|5s|2024-01-01 00:00:00\nok|1s|2024-01-01 00:00:01\n")
    store = HistoryStore(path)

    records = store.read_records()
    assert [r.name for r in records] == ["caf\udce9", "ok"]

    assert show_history(store, output) is True
    assert "Task: ok\nDuration: 1s\nCompleted: 2024-01-01 00:00:01\n" in output.lines


def test_non_utf8_name_round_trips_as_raw_bytes(history_store: HistoryStore) -> None:
    history_store.append(Task(name="caf\udce9", duration=timedelta(seconds=5)), datetime(2024, 1, 1))

    assert history_store.path.read_bytes() == b"caf\xe9|5s|2024-01-01 00:00:00\n"
    assert history_store.read_records()[0].name == "caf\udce9"


def test_show_history_reports_decode_errors(output) -> None:
    err = UnicodeDecodeError("utf-8", b"\xe9", 0, 1, "invalid continuation byte")

    assert show_history(FakeHistory(error=err), output) is False
    assert output.lines[0].startswith("Error showing history: ")
