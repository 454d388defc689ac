# src/queue_timer/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum


class TimerState(StrEnum):
    """
    Countdown lifecycle.

    There is no cancelled state: once started, a timer always runs to natural completion.
    """

    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(slots=True, frozen=True)
class Task:
    name: str
    duration: timedelta

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("task name must not be empty")
        if self.duration < timedelta(0):
            raise ValueError("task duration must not be negative")


@dataclass(slots=True, frozen=True)
class HistoryRecord:
    """
    One line of the history log.

    Written when a task is taken off the queue and started, so a record means
    "started", even though the display label says "Completed".
    """

    name: str
    duration: str
    timestamp: str
