# src/queue_timer/tasks/task_queue.py

from __future__ import annotations

import logging
import threading
from collections import deque

from .task_models import Task

logger = logging.getLogger(__name__)


class TaskQueue:
    """
    FIFO of pending tasks shared by the command dispatcher (producer) and the main loop
    (single consumer).

    Thread-safety:
    - one lock guards every read and mutation of the underlying deque
    - no blocking variant; callers poll
    """

    def __init__(self) -> None:
        self._items: deque[Task] = deque()
        self._lock = threading.Lock()

    def push(self, task: Task) -> None:
        with self._lock:
            self._items.append(task)
            size = len(self._items)
        logger.debug("Queued task %r (pending=%d)", task.name, size)

    def pop_front(self) -> Task | None:
        """Remove and return the head, or None when the queue is empty."""
        with self._lock:
            if not self._items:
                return None
            task = self._items.popleft()
            size = len(self._items)
        logger.debug("Dequeued task %r (pending=%d)", task.name, size)
        return task

    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
