# src/queue_timer/cli/commands.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum

from ..core.ports import OutputSink
from ..tasks.duration import DurationParseError, format_duration, parse_duration
from ..tasks.task_models import Task
from ..tasks.task_queue import TaskQueue

logger = logging.getLogger(__name__)

ADD_PREFIX = "add "

USAGE_UNKNOWN = "Unknown command. Use 'add <task> [flags]' or 'exit'"
USAGE_EMPTY_NAME = "Invalid command format. Use: add <task name> [flags]"
MSG_NON_POSITIVE = "Duration must be positive"


class ActionKind(StrEnum):
    EXIT = "exit"
    ADD_TASK = "add_task"
    UNRECOGNIZED = "unrecognized"
    REJECTED_EMPTY_NAME = "rejected_empty_name"
    REJECTED_BAD_DURATION = "rejected_bad_duration"
    REJECTED_NON_POSITIVE_DURATION = "rejected_non_positive_duration"


@dataclass(slots=True, frozen=True)
class Action:
    """
    Result of parsing one input line.

    - task is set only for ADD_TASK
    - error is set only for REJECTED_BAD_DURATION
    """

    kind: ActionKind
    task: Task | None = None
    error: DurationParseError | None = None


def _find_flag_index(tokens: list[str]) -> int | None:
    """Index of the first token starting with '-', or None when there is none."""
    for i, token in enumerate(tokens):
        if token.startswith("-"):
            return i
    return None


def parse_command(line: str) -> Action:
    """
    Turn one input line into an Action. Pure: nothing is queued or printed here.

    Rules, in order:
    1. "exit" (any case) -> EXIT
    2. must start with "add " -> else UNRECOGNIZED
    3. tokens before the first "-..." token form the name; the rest are duration flags
    4. bad flags -> REJECTED_BAD_DURATION
    5. zero duration -> REJECTED_NON_POSITIVE_DURATION
    """
    if line.lower() == "exit":
        return Action(ActionKind.EXIT)

    if not line.startswith(ADD_PREFIX):
        return Action(ActionKind.UNRECOGNIZED)

    tokens = line[len(ADD_PREFIX):].split()
    flag_index = _find_flag_index(tokens)

    if flag_index is None:
        # No flags at all: the whole remainder is the name and the duration is zero.
        name_tokens, flag_tokens = tokens, []
    elif flag_index == 0:
        return Action(ActionKind.REJECTED_EMPTY_NAME)
    else:
        name_tokens, flag_tokens = tokens[:flag_index], tokens[flag_index:]

    name = " ".join(name_tokens)
    if not name:
        return Action(ActionKind.REJECTED_EMPTY_NAME)

    try:
        duration = parse_duration(" ".join(flag_tokens))
    except DurationParseError as e:
        return Action(ActionKind.REJECTED_BAD_DURATION, error=e)

    if duration <= timedelta(0):
        return Action(ActionKind.REJECTED_NON_POSITIVE_DURATION)

    return Action(ActionKind.ADD_TASK, task=Task(name=name, duration=duration))


class CommandDispatcher:
    """Applies parsed commands: queues accepted tasks and prints feedback."""

    def __init__(self, task_queue: TaskQueue, output: OutputSink) -> None:
        self._queue = task_queue
        self._output = output

    def dispatch(self, line: str) -> Action:
        return parse_command(line)

    def handle(self, line: str) -> bool:
        """
        Dispatch one line and apply its side effects.
        Returns True when the caller should exit.
        """
        action = self.dispatch(line)
        logger.debug("Command %r -> %s", line, action.kind.value)

        if action.kind is ActionKind.EXIT:
            self._output.line("Exiting...")
            return True

        if action.kind is ActionKind.ADD_TASK and action.task is not None:
            self._queue.push(action.task)
            self._output.line(
                f"Added task: {action.task.name} ({format_duration(action.task.duration)})"
            )
            return False

        if action.kind is ActionKind.UNRECOGNIZED:
            self._output.line(USAGE_UNKNOWN)
        elif action.kind is ActionKind.REJECTED_EMPTY_NAME:
            self._output.line(USAGE_EMPTY_NAME)
        elif action.kind is ActionKind.REJECTED_BAD_DURATION:
            self._output.line(f"Error parsing duration: {action.error}")
        elif action.kind is ActionKind.REJECTED_NON_POSITIVE_DURATION:
            self._output.line(MSG_NON_POSITIVE)
        return False
