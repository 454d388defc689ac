# tests/test_timer_runner.py

from __future__ import annotations

import re
import time
from datetime import timedelta

from queue_timer.tasks.task_models import Task, TimerState
from queue_timer.tasks.timer_runner import TimerRunner

from .fakes import FakeClock, RecordingOutput

PROGRESS_RE = re.compile(r"^(?P<name>.+): (?P<left>\S+)\s+remaining$")


def _remaining_seconds(status: str) -> int:
    m = PROGRESS_RE.match(status)
    assert m, status
    left = m.group("left")
    total = 0
    for value, unit in re.findall(r"(\d+)([hms])", left):
        total += int(value) * {"h": 3600, "m": 60, "s": 1}[unit]
    return total


def test_three_second_timer_with_fake_clock() -> None:
    clock = FakeClock()
    out = RecordingOutput()
    runner = TimerRunner(Task("Tea", timedelta(seconds=3)), out, clock=clock, sleep=clock.sleep)

    runner.run()

    assert out.lines == ["Starting Tea timer for 3s"]
    assert [_remaining_seconds(s) for s in out.statuses] == [2, 1]
    assert out.completions == ["Tea: Completed!"]
    assert out.events[-1][0] == "end_status"
    assert runner.state is TimerState.COMPLETED
    assert runner.done.is_set()


def test_ticks_do_not_drift_with_sleep_overshoot() -> None:
    clock = FakeClock(jitter=0.05)
    out = RecordingOutput()
    runner = TimerRunner(Task("T", timedelta(seconds=5)), out, clock=clock, sleep=clock.sleep)

    runner.run()

    # Each sleep compensates for the previous overshoot.
    assert all(abs(s - 0.95) < 1e-9 for s in clock.sleeps[1:])
    values = [_remaining_seconds(s) for s in out.statuses]
    assert values == sorted(values, reverse=True)
    assert len(out.completions) == 1


def test_long_durations_render_with_hours() -> None:
    clock = FakeClock()
    out = RecordingOutput()
    runner = TimerRunner(
        Task("Long", timedelta(hours=1, seconds=2)), out, clock=clock, sleep=clock.sleep
    )

    runner.run()

    assert out.lines == ["Starting Long timer for 1h0m2s"]
    assert out.statuses[0].startswith("Long: 1h0m1s")
    assert len(out.statuses) == 3601
    assert len(out.completions) == 1


def test_output_failure_still_signals_done() -> None:
    class BrokenOutput(RecordingOutput):
        def status(self, text: str) -> None:
            raise RuntimeError("terminal gone")

    clock = FakeClock()
    runner = TimerRunner(
        Task("T", timedelta(seconds=2)), BrokenOutput(), clock=clock, sleep=clock.sleep
    )

    done = runner.start()

    assert done.wait(timeout=2.0)
    assert runner.state is TimerState.RUNNING


def test_real_three_second_timer_in_background() -> None:
    out = RecordingOutput()
    runner = TimerRunner(Task("Real", timedelta(seconds=3)), out)

    started = time.monotonic()
    done = runner.start()
    assert not done.is_set()
    assert done.wait(timeout=6.0)
    elapsed = time.monotonic() - started

    assert 2.5 <= elapsed < 5.0
    values = [_remaining_seconds(s) for s in out.statuses]
    assert 1 <= len(values) <= 3
    assert values == sorted(values, reverse=True)
    assert all(v > 0 for v in values)
    assert out.completions == ["Real: Completed!"]
