"""
Next-tick task queue.

Event handlers schedule work instead of running it, so a resize observes
the layout after the host has finished handling the event. Tasks run in
the order they were scheduled, one at a time.
"""

from collections import deque
from typing import Any, Callable

from .telemetry import get_logger

logger = get_logger(__name__)


class TaskQueue:
    """Single-threaded FIFO of deferred callbacks."""

    def __init__(self):
        self._tasks: deque[tuple[Callable[..., Any], tuple]] = deque()

    def __len__(self) -> int:
        return len(self._tasks)

    def schedule(self, callback: Callable[..., Any], *args: Any) -> None:
        """Queue ``callback(*args)`` for the next tick."""
        self._tasks.append((callback, args))

    def run_pending(self) -> int:
        """
        Run the tasks queued before this call.

        Tasks scheduled while draining wait for the next tick. A failing
        task is logged and the rest still run.

        Returns:
            Number of tasks run.
        """
        count = len(self._tasks)
        for _ in range(count):
            callback, args = self._tasks.popleft()
            try:
                callback(*args)
            except Exception:
                logger.exception("Scheduled task %r failed", callback)
        return count

    def clear(self) -> None:
        """Drop all pending tasks."""
        self._tasks.clear()
