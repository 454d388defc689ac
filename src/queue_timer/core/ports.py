# src/queue_timer/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The main loop, dispatcher and timer depend on Protocols instead of concrete implementations.
This keeps the console and the history file swappable and makes testing easier.
"""

import threading
from datetime import datetime
from typing import Protocol

from ..tasks.task_models import HistoryRecord, Task


class OutputSink(Protocol):
    """Where user-visible text goes (console in production, a recorder in tests)."""

    def line(self, text: str) -> None: ...

    def status(self, text: str) -> None:
        """Replace the current in-place status line with `text`."""
        ...

    def end_status(self, text: str) -> None:
        """Replace the status line with `text` one last time and move to a fresh line."""
        ...

    def success(self, text: str) -> str:
        """Decorate `text` as a success notice (e.g. green on a colour terminal)."""
        ...


class HistoryRepo(Protocol):
    def append(self, task: Task, when: datetime | None = None) -> HistoryRecord: ...

    def read_records(self) -> list[HistoryRecord]: ...


class CommandSource(Protocol):
    """
    Single-consumer channel of input lines.

    `next_line(timeout)` returns:
    - a str when a line is ready
    - None when nothing arrived in time
    - raises EOFError once the stream is closed and drained
    """

    def next_line(self, timeout: float) -> str | None: ...


class StartableTimer(Protocol):
    """A countdown that runs in the background and reports completion through an Event."""

    def start(self) -> threading.Event: ...
