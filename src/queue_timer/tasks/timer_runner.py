# src/queue_timer/tasks/timer_runner.py

from __future__ import annotations

"""
Countdown runner.

Drives one task to completion on a fixed one-second tick:
- every tick computes the remaining time against a precomputed end instant,
- overwrites the progress line while time remains,
- prints a single "Completed!" notice and stops once nothing remains.

A started timer cannot be cancelled, paused or changed. The main loop learns about
completion through the Event returned by `start()`.
"""

import logging
import threading
import time
from collections.abc import Callable

from ..config import TICK_SECONDS
from ..core.ports import OutputSink
from .duration import format_duration, round_seconds
from .task_models import Task, TimerState

logger = logging.getLogger(__name__)


class TimerRunner:
    def __init__(
        self,
        task: Task,
        output: OutputSink,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.task = task
        self._output = output
        self._clock = clock
        self._sleep = sleep
        self._state = TimerState.RUNNING
        self._done = threading.Event()

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def done(self) -> threading.Event:
        """One-shot completion signal; safe to wait on from any number of threads."""
        return self._done

    def run(self) -> None:
        """Block until the countdown reaches zero, then set the completion signal."""
        try:
            self._countdown()
        finally:
            self._done.set()

    def _countdown(self) -> None:
        name = self.task.name
        start = self._clock()
        end = start + self.task.duration.total_seconds()

        logger.info("Timer started name=%r duration=%s", name, format_duration(self.task.duration))
        self._output.line(f"Starting {name} timer for {format_duration(self.task.duration)}")

        ticks = 0
        while self._state is TimerState.RUNNING:
            ticks += 1
            # Anchor ticks to the start instant so sleep overshoot does not accumulate.
            delay = start + ticks * TICK_SECONDS - self._clock()
            if delay > 0:
                self._sleep(delay)

            remaining = round_seconds(max(end - self._clock(), 0.0))
            if remaining <= 0:
                self._output.end_status(f"{name}: {self._output.success('Completed!')}")
                self._state = TimerState.COMPLETED
            else:
                self._output.status(f"{name}: {format_duration(remaining):<10} remaining")

        logger.info("Timer completed name=%r ticks=%d", name, ticks)

    def _run_logged(self) -> None:
        try:
            self.run()
        except Exception:
            # The signal is already set by run(); the main loop moves on to the next task.
            logger.exception("Timer crashed name=%r", self.task.name)

    def start(self) -> threading.Event:
        """Run the countdown on a daemon thread and return its completion signal."""
        thread = threading.Thread(
            target=self._run_logged,
            name=f"timer-{self.task.name}",
            daemon=True,
        )
        thread.start()
        return self._done
