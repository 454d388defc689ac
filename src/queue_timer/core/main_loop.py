# src/queue_timer/core/main_loop.py

from __future__ import annotations

"""
Main scheduling loop.

Alternates between two modes:
- idle: the queue is empty, so just poll for commands with a short bounded wait;
- active: pop one task, start its timer, log it to history, and keep servicing commands
  until the timer signals completion.

The loop ends on an `exit` command or when the input stream closes. Neither waits for an
in-flight timer: timer threads are daemons and die with the process.
"""

import logging
from collections.abc import Callable

from ..cli.commands import CommandDispatcher
from ..config import DEFAULT_IDLE_POLL_SECONDS
from ..tasks.task_models import Task
from ..tasks.task_queue import TaskQueue
from .ports import CommandSource, HistoryRepo, OutputSink, StartableTimer

logger = logging.getLogger(__name__)

TimerFactory = Callable[[Task, OutputSink], StartableTimer]


class MainLoop:
    def __init__(
        self,
        *,
        task_queue: TaskQueue,
        dispatcher: CommandDispatcher,
        commands: CommandSource,
        history: HistoryRepo,
        output: OutputSink,
        timer_factory: TimerFactory,
        poll_seconds: float = DEFAULT_IDLE_POLL_SECONDS,
    ) -> None:
        self._queue = task_queue
        self._dispatcher = dispatcher
        self._commands = commands
        self._history = history
        self._output = output
        self._timer_factory = timer_factory
        self._poll_s = max(0.01, float(poll_seconds))

    def run(self) -> int:
        """Run until exit or end of input. Returns the process exit code."""
        logger.info("Main loop started (poll=%.3fs).", self._poll_s)

        while True:
            task = self._queue.pop_front()

            if task is None:
                if self._service_one_command():
                    return 0
                continue

            done = self._timer_factory(task, self._output).start()

            # Recorded at start time, before the countdown finishes.
            self._log_history(task)

            while not done.is_set():
                if self._service_one_command():
                    return 0

            logger.debug("Timer finished name=%r pending=%d", task.name, len(self._queue))

    def _log_history(self, task: Task) -> None:
        try:
            self._history.append(task)
        except (OSError, UnicodeError) as e:
            logger.warning("History append failed name=%r: %s", task.name, e)
            self._output.line(f"Error logging history: {e}")

    def _service_one_command(self) -> bool:
        """
        Wait up to one poll interval for a command and handle it.
        Returns True when the loop should stop.
        """
        try:
            line = self._commands.next_line(self._poll_s)
        except EOFError:
            logger.info("Input closed, leaving main loop.")
            return True

        if line is None:
            return False

        try:
            return self._dispatcher.handle(line)
        except Exception:
            logger.exception("Command handler crashed.")
            self._output.line("Internal error while handling a command.")
            return False
