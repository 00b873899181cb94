"""Current time and date strings refreshed once per clock second."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from task_timer.services.clock import Clock, ScheduledTask
from task_timer.services.observers import Subscribers

WEEKDAYS = ("星期一", "星期二", "星期三", "星期四", "星期五", "星期六", "星期日")


def format_time(moment: datetime) -> str:
    return moment.strftime("%H:%M:%S")


def format_date(moment: datetime) -> str:
    """Long Chinese date, e.g. ``2025年10月21日 星期二``."""
    return f"{moment.year:04d}年{moment.month:02d}月{moment.day:02d}日 {WEEKDAYS[moment.weekday()]}"


class WallClock:
    """Keeps ``current_time`` and ``current_date`` up to date."""

    def __init__(self, clock: Clock):
        self.clock = clock
        self.current_time = ""
        self.current_date = ""
        self._ticker: ScheduledTask | None = None
        self._subscribers: Subscribers[WallClock] = Subscribers()

    @property
    def active(self) -> bool:
        return self._ticker is not None

    def start(self) -> None:
        if self._ticker is not None:
            return
        self.refresh()
        self._ticker = self.clock.schedule_every(1.0, self.refresh)

    def stop(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def refresh(self) -> None:
        now = self.clock.now()
        self.current_time = format_time(now)
        self.current_date = format_date(now)
        self._subscribers.notify(self)

    def subscribe(self, callback: Callable[["WallClock"], None]) -> Callable[[], None]:
        return self._subscribers.add(callback)
