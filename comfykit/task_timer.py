"""Accumulating wall-clock timers for named tasks."""

from __future__ import annotations

import threading
import time
from datetime import timedelta
from typing import Callable, Dict, Optional

__all__ = ["TaskTimer", "start_task", "get_duration"]


class _TaskGuard:
    """Measures one run of a task; records it when the block exits."""

    __slots__ = ("_owner", "_name", "_start", "_done")

    def __init__(self, owner: TaskTimer, name: str) -> None:
        self._owner = owner
        self._name = name
        self._start = owner._clock()
        self._done = False

    def __enter__(self) -> _TaskGuard:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def stop(self) -> None:
        """Record the elapsed time; later calls do nothing."""
        if self._done:
            return
        self._done = True
        self._owner._add(self._name, self._owner._clock() - self._start)


class TaskTimer:
    """Sums the time spent in named tasks."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._timers: Dict[str, timedelta] = {}
        self._lock = threading.Lock()

    def start_task(self, task_name: str) -> _TaskGuard:
        """Start timing ``task_name``; use the result as a context manager."""
        return _TaskGuard(self, task_name)

    def get_duration(self, task_name: str) -> Optional[timedelta]:
        """Total time recorded for ``task_name``, or None if never recorded."""
        with self._lock:
            return self._timers.get(task_name)

    def _add(self, task_name: str, seconds: float) -> None:
        with self._lock:
            total = self._timers.get(task_name, timedelta(0))
            self._timers[task_name] = total + timedelta(seconds=seconds)


_GLOBAL_TASK_TIMER = TaskTimer()


def start_task(task_name: str) -> _TaskGuard:
    """Start timing ``task_name`` on the shared timer."""
    return _GLOBAL_TASK_TIMER.start_task(task_name)


def get_duration(task_name: str) -> Optional[timedelta]:
    """Total recorded time for ``task_name`` on the shared timer."""
    return _GLOBAL_TASK_TIMER.get_duration(task_name)