# src/queue_timer/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then either:
- prints the history log (--history), or
- runs the interactive timer loop until `exit` or end of input.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from ..config import get_settings
from ..logging_setup import setup_logging
from .bootstrap import build_main_loop, create_initial_state
from .history_view import show_history

logger = logging.getLogger(__name__)

BANNER = (
    "Timer - enter commands ('add' or 'exit')\n"
    "Format: add <task name> [-h N] [-m N] [-s N]\n"
    "Example: add Study Session -m 25 -s 30"
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="queue-timer",
        description="Queue named countdown timers and run them one after another.",
    )
    parser.add_argument("--history", action="store_true", help="show timer history and exit")
    parser.add_argument(
        "--history-file",
        default=None,
        help="history log to read/append (default: $QTIMER_HISTORY_PATH or timer_history.log)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    state = create_initial_state(settings=settings, history_path=args.history_file)

    if args.history:
        show_history(state.history, state.output)
        return 0

    logger.info("Starting %s (history=%s)...", settings.app_name, state.history.path)
    loop = build_main_loop(state)

    state.output.line(BANNER)
    state.output.prompt("$ ")
    try:
        code = loop.run()
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt, exiting.")
        state.output.line("")
        code = 0

    logger.info("Bye.")
    return code


if __name__ == "__main__":
    raise SystemExit(main())
