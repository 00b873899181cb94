"""Countdown timer engine for focus sessions.

States::

    idle --start--> running --stop--> paused --start--> running
    running --tick reaches target--> completed --start/restart--> running
    any --stop_mode--> idle

The engine consumes one-second ticks from a Clock while running. Reaching the
target stops the engine, emits exactly one ``completed`` event and rewinds
``elapsed_seconds`` to zero.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from task_timer.models.exceptions import InvalidDurationError
from task_timer.models.timer import (
    DEFAULT_TARGET_SECONDS,
    TimerEvent,
    TimerEventKind,
    TimerPhase,
    TimerState,
)
from task_timer.services.clock import Clock, ScheduledTask
from task_timer.services.observers import Subscribers

logger = logging.getLogger(__name__)

TICK_INTERVAL = 1.0


class TimerEngine:
    """Single countdown state machine."""

    def __init__(self, clock: Clock, default_target_seconds: int = DEFAULT_TARGET_SECONDS):
        if default_target_seconds <= 0:
            raise InvalidDurationError("default target must be positive")
        self.clock = clock
        self.default_target_seconds = default_target_seconds
        self._state = TimerState(target_seconds=default_target_seconds)
        self._ticker: ScheduledTask | None = None
        self._subscribers: Subscribers[TimerEvent] = Subscribers()

    @property
    def state(self) -> TimerState:
        """A copy of the current state."""
        return self._state.snapshot()

    @property
    def running(self) -> bool:
        return self._state.running

    @property
    def phase(self) -> TimerPhase:
        return self._state.phase

    @property
    def display(self) -> str:
        return self._state.display

    def subscribe(self, callback: Callable[[TimerEvent], None]) -> Callable[[], None]:
        return self._subscribers.add(callback)

    def start(self) -> None:
        if self._state.running:
            return
        self._state.running = True
        self._state.pomodoro_active = True
        self._state.phase = TimerPhase.RUNNING
        self._ticker = self.clock.schedule_every(TICK_INTERVAL, self.tick)
        logger.debug("timer started at %s", self.display)
        self._emit(TimerEventKind.CHANGED)

    def stop(self) -> None:
        """Pause: stop consuming ticks but keep elapsed and target."""
        self._cancel_ticker()
        was_running = self._state.running
        self._state.running = False
        if self._state.phase == TimerPhase.RUNNING:
            self._state.phase = TimerPhase.PAUSED
        if was_running:
            logger.debug("timer stopped at %s", self.display)
            self._emit(TimerEventKind.CHANGED)

    def toggle(self) -> None:
        if self._state.running:
            self.stop()
        else:
            self.start()

    def tick(self) -> None:
        """Advance one second. Ignored unless running."""
        if not self._state.running:
            return
        self._state.elapsed_seconds += 1
        if self._state.elapsed_seconds < self._state.target_seconds:
            self._emit(TimerEventKind.TICK)
            return

        # Straight to completed; no intermediate paused state is published.
        self._cancel_ticker()
        self._state.running = False
        self._state.phase = TimerPhase.COMPLETED
        logger.info("countdown of %d seconds completed", self._state.target_seconds)
        self._emit(TimerEventKind.COMPLETED)
        self._state.elapsed_seconds = 0
        self._emit(TimerEventKind.CHANGED)

    def restart(self) -> None:
        self.stop()
        self._state.elapsed_seconds = 0
        self.start()

    def set_duration(self, minutes: int) -> None:
        """Set the countdown length, keeping the running/paused status.

        Raises:
            InvalidDurationError: If *minutes* is not an integer of at least 1
        """
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 1:
            raise InvalidDurationError(f"duration must be >= 1 minute, got {minutes!r}")
        was_running = self._state.running
        self.stop()
        self._state.target_seconds = minutes * 60
        self._state.elapsed_seconds = 0
        logger.info("timer duration set to %d minute(s)", minutes)
        if was_running:
            self.start()
        else:
            self._emit(TimerEventKind.CHANGED)

    def stop_mode(self) -> None:
        """Leave pomodoro mode and return to the default countdown."""
        self.stop()
        self._state.pomodoro_active = False
        self._state.elapsed_seconds = 0
        self._state.target_seconds = self.default_target_seconds
        self._state.phase = TimerPhase.IDLE
        self._emit(TimerEventKind.CHANGED)

    def dispose(self) -> None:
        """Cancel the clock subscription without touching state."""
        self._cancel_ticker()

    def _cancel_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def _emit(self, kind: TimerEventKind) -> None:
        self._subscribers.notify(TimerEvent(kind, self._state.snapshot()))
