# src/queue_timer/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- ensures the local data directory exists,
- wires concrete implementations into AppState (console, history file, task queue),
- builds the main loop on top of that state.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from ..config import Settings, get_settings
from ..connectors.console_connector import ConsoleInputReader, ConsoleOutput
from ..core.main_loop import MainLoop
from ..core.state import AppState
from ..tasks.history_store import HistoryStore
from ..tasks.task_queue import TaskQueue
from ..tasks.timer_runner import TimerRunner
from .commands import CommandDispatcher

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings: Settings | None = None,
    history_path: str | Path | None = None,
    stdout: TextIO | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings(). `history_path` overrides
    settings.history_path for this run (the --history-file flag).
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    path = Path(history_path) if history_path is not None else settings.history_path
    state = AppState(
        settings=settings,
        output=ConsoleOutput(stdout, color=settings.color),
        history=HistoryStore(path),
        task_queue=TaskQueue(),
    )
    logger.debug("State ready history=%s", path)
    return state


def build_main_loop(state: AppState, *, stdin: TextIO | None = None) -> MainLoop:
    """Start the console reader thread and wire the main loop around it."""
    reader = ConsoleInputReader(stdin, output=state.output).start()
    dispatcher = CommandDispatcher(state.task_queue, state.output)
    return MainLoop(
        task_queue=state.task_queue,
        dispatcher=dispatcher,
        commands=reader,
        history=state.history,
        output=state.output,
        timer_factory=TimerRunner,
        poll_seconds=state.settings.idle_poll_seconds,
    )
