# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from queue_timer.config import Settings
from queue_timer.tasks.history_store import HistoryStore
from queue_timer.tasks.task_queue import TaskQueue

from .fakes import RecordingOutput


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at a per-test temp dir.

    Built directly rather than through get_settings(), so tests never read the real
    environment or a local .env.
    """
    return Settings(
        app_name="queue-timer-test",
        log_level="WARNING",
        data_dir=tmp_path / "data",
        history_path=tmp_path / "timer_history.log",
        idle_poll_seconds=0.02,
        color=False,
    )


@pytest.fixture()
def output() -> RecordingOutput:
    return RecordingOutput()


@pytest.fixture()
def task_queue() -> TaskQueue:
    return TaskQueue()


@pytest.fixture()
def history_store(settings: Settings) -> HistoryStore:
    return HistoryStore(settings.history_path)
