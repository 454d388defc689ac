# src/queue_timer/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..connectors.console_connector import ConsoleOutput
from ..tasks.history_store import HistoryStore
from ..tasks.task_queue import TaskQueue


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Settings

    output: ConsoleOutput
    history: HistoryStore
    task_queue: TaskQueue
