"""Clock sources for periodic callbacks.

A clock hands out ``ScheduledTask`` handles; cancelling a handle stops its
callback. ``AsyncioClock`` runs on the current event loop, ``ManualClock``
only moves when told to and is what the tests drive.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

_EPSILON = 1e-9


class ScheduledTask:
    """Handle for a repeating callback."""

    def __init__(self, interval: float, callback: Callable[[], None]):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.callback = callback
        self._cancelled = False
        self._on_cancel: Callable[[], None] | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop future callbacks. Safe to call more than once."""
        if self._cancelled:
            return
        self._cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()


class Clock(ABC):
    """Source of wall-clock time and repeating callbacks."""

    @abstractmethod
    def schedule_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        """Call *callback* every *interval* seconds until cancelled."""
        raise NotImplementedError("Clock.schedule_every() must be implemented")

    def now(self) -> datetime:
        return datetime.now().astimezone()


class AsyncioClock(Clock):
    """Drives callbacks from an asyncio event loop.

    Ticks are anchored to the time of scheduling so that slow callbacks do
    not accumulate drift.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def schedule_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        loop = self._loop or asyncio.get_running_loop()
        task = ScheduledTask(interval, callback)
        start = loop.time()
        fired = 0

        def fire() -> None:
            nonlocal handle, fired
            if task.cancelled:
                return
            fired += 1
            # Schedule the next tick first so a cancel inside the callback wins.
            handle = loop.call_at(start + (fired + 1) * interval, fire)
            task.callback()

        handle = loop.call_at(start + interval, fire)
        task._on_cancel = lambda: handle.cancel()
        return task


@dataclass
class _Entry:
    task: ScheduledTask
    next_due: float


class ManualClock(Clock):
    """Clock that advances only through ``advance()``."""

    def __init__(self, start: datetime | None = None):
        self._start = start or datetime(2025, 10, 21, 9, 0, 0, tzinfo=timezone.utc)
        self._elapsed = 0.0
        self._entries: list[_Entry] = []

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def active_tasks(self) -> int:
        return sum(1 for entry in self._entries if not entry.task.cancelled)

    def now(self) -> datetime:
        return self._start + timedelta(seconds=self._elapsed)

    def schedule_every(self, interval: float, callback: Callable[[], None]) -> ScheduledTask:
        task = ScheduledTask(interval, callback)
        self._entries.append(_Entry(task, self._elapsed + interval))
        return task

    def advance(self, seconds: float = 1.0) -> None:
        """Move time forward, firing due callbacks in registration order."""
        target = self._elapsed + seconds
        while True:
            due = [
                e for e in self._entries
                if not e.task.cancelled and e.next_due <= target + _EPSILON
            ]
            if not due:
                break
            moment = min(e.next_due for e in due)
            self._elapsed = moment
            for entry in due:
                if entry.task.cancelled or entry.next_due > moment + _EPSILON:
                    continue
                entry.next_due += entry.task.interval
                entry.task.callback()
            self._entries = [e for e in self._entries if not e.task.cancelled]
        self._elapsed = target
