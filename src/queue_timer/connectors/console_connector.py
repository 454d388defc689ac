# src/queue_timer/connectors/console_connector.py

from __future__ import annotations

import logging
import queue
import sys
import threading
from typing import TextIO

logger = logging.getLogger(__name__)

GREEN = "\033[32m"
RESET = "\033[0m"


class ConsoleOutput:
    """
    Thread-safe console writer shared by the main loop and the timer thread.

    Status lines are rewritten in place with a carriage return. A regular `line()` printed
    while a status line is showing first moves below it, so the last progress value stays
    visible above command feedback.
    """

    def __init__(self, stream: TextIO | None = None, *, color: bool = True) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._lock = threading.Lock()
        self._status_open = False
        self._status_width = 0
        self._color = color and self._isatty()

    def _isatty(self) -> bool:
        try:
            return bool(self._stream.isatty())
        except Exception:
            return False

    def success(self, text: str) -> str:
        if not self._color:
            return text
        return f"{GREEN}{text}{RESET}"

    def line(self, text: str) -> None:
        with self._lock:
            if self._status_open:
                self._stream.write("\n")
                self._status_open = False
            self._stream.write(text + "\n")
            self._stream.flush()

    def _padded(self, text: str) -> str:
        # Blank out leftovers of a longer previous status line.
        padded = text.ljust(self._status_width) if self._status_open else text
        self._status_width = len(text)
        return padded

    def status(self, text: str) -> None:
        with self._lock:
            self._stream.write("\r" + self._padded(text))
            self._stream.flush()
            self._status_open = True

    def end_status(self, text: str) -> None:
        with self._lock:
            self._stream.write("\r" + self._padded(text) + "\n")
            self._stream.flush()
            self._status_open = False

    def prompt(self, text: str = "$ ") -> None:
        with self._lock:
            self._stream.write(text)
            self._stream.flush()


_EOF = object()


class ConsoleInputReader:
    """
    Reads lines from a text stream on a daemon thread and hands them to a single consumer.

    The reader suspends on each read; the consumer polls with a bounded timeout.
    A read error is reported and then treated like the end of the stream.
    """

    def __init__(self, stream: TextIO | None = None, *, output: ConsoleOutput | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._output = output
        self._lines: queue.Queue[object] = queue.Queue()
        self._closed = False
        self._thread: threading.Thread | None = None

    def start(self) -> "ConsoleInputReader":
        if self._thread is None:
            self._thread = threading.Thread(target=self._read_loop, name="console-input", daemon=True)
            self._thread.start()
        return self

    def _read_loop(self) -> None:
        try:
            for raw in self._stream:
                self._lines.put(raw.rstrip("\r\n"))
        except Exception as e:
            logger.exception("Console input read failed.")
            if self._output is not None:
                self._output.line(f"Input error: {e}")
        finally:
            logger.info("Console input closed.")
            self._lines.put(_EOF)

    def next_line(self, timeout: float) -> str | None:
        """
        Next input line, None if nothing arrived within `timeout` seconds.
        Raises EOFError once the stream is closed and every line was consumed.
        """
        if self._closed:
            raise EOFError("console input closed")
        try:
            item = self._lines.get(timeout=timeout)
        except queue.Empty:
            return None
        if item is _EOF:
            self._closed = True
            raise EOFError("console input closed")
        return str(item)
