"""Countdown timer state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

DEFAULT_TARGET_SECONDS = 25 * 60


class TimerPhase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class TimerEventKind(str, Enum):
    CHANGED = "changed"
    TICK = "tick"
    COMPLETED = "completed"


def format_remaining(seconds: int) -> str:
    """Format seconds as zero-padded ``MM:SS``; negatives clamp to zero."""
    seconds = max(0, seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


@dataclass
class TimerState:
    """Mutable state owned by a TimerEngine."""

    elapsed_seconds: int = 0
    target_seconds: int = DEFAULT_TARGET_SECONDS
    running: bool = False
    pomodoro_active: bool = False
    phase: TimerPhase = TimerPhase.IDLE

    @property
    def remaining_seconds(self) -> int:
        return max(0, self.target_seconds - self.elapsed_seconds)

    @property
    def display(self) -> str:
        return format_remaining(self.remaining_seconds)

    def snapshot(self) -> TimerState:
        return replace(self)


@dataclass(frozen=True)
class TimerEvent:
    """Notification sent to TimerEngine subscribers."""

    kind: TimerEventKind
    state: TimerState
