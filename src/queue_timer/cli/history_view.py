# src/queue_timer/cli/history_view.py

from __future__ import annotations

import logging

from ..core.ports import HistoryRepo, OutputSink

logger = logging.getLogger(__name__)

RULE = "-" * 40


def show_history(history: HistoryRepo, output: OutputSink) -> bool:
    """
    Print every history record as a labelled block.

    A missing history file is not an error ("No history available"). Other read errors are
    reported and False is returned.
    """
    try:
        records = history.read_records()
    except FileNotFoundError:
        output.line("No history available")
        return True
    except (OSError, UnicodeError) as e:
        logger.exception("Failed to read history.")
        output.line(f"Error showing history: {e}")
        return False

    output.line("")
    output.line("Task History:")
    output.line(RULE)
    for rec in records:
        output.line(f"Task: {rec.name}\nDuration: {rec.duration}\nCompleted: {rec.timestamp}\n")
    return True
