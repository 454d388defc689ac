# src/queue_timer/tasks/history_store.py

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from .duration import format_duration
from .task_models import HistoryRecord, Task

logger = logging.getLogger(__name__)

FIELD_SEP = "|"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class HistoryStore:
    """
    Append-only text log of started tasks.

    Format: one record per line, `name|duration|YYYY-MM-DD HH:MM:SS`.

    Thread-safety:
    - each call opens and closes the file; appends are single short writes
    """

    def __init__(self, path: str | Path = "timer_history.log") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def append(self, task: Task, when: datetime | None = None) -> HistoryRecord:
        """Append one record. OSError propagates to the caller."""
        when = when or datetime.now()
        record = HistoryRecord(
            name=task.name,
            duration=format_duration(task.duration),
            timestamp=when.strftime(TIMESTAMP_FORMAT),
        )
        line = FIELD_SEP.join((record.name, record.duration, record.timestamp))

        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8", errors="surrogateescape") as fh:
            fh.write(line + "\n")

        logger.debug("History append path=%s name=%r", self._path, record.name)
        return record

    def read_records(self) -> list[HistoryRecord]:
        """
        Read every well-formed record.

        Raises FileNotFoundError when no history was written yet; lines that do not split
        into exactly three fields are skipped. Bytes that are not valid UTF-8 come back as
        surrogate escapes, so they survive a read-then-append round trip.
        """
        out: list[HistoryRecord] = []
        skipped = 0
        with self._path.open("r", encoding="utf-8", errors="surrogateescape") as fh:
            for raw in fh:
                parts = raw.rstrip("\r\n").split(FIELD_SEP)
                if len(parts) != 3:
                    skipped += 1
                    continue
                out.append(HistoryRecord(name=parts[0], duration=parts[1], timestamp=parts[2]))

        if skipped:
            logger.info("History read path=%s skipped %d malformed line(s)", self._path, skipped)
        return out
