"""Service layer: task store, timer engine, clocks and the controller."""

from .clock import AsyncioClock, Clock, ManualClock, ScheduledTask
from .controller import ControllerSnapshot, TaskTimerController, create_controller
from .task_store import TaskStore
from .timer_engine import TimerEngine
from .wall_clock import WallClock

__all__ = [
    "AsyncioClock",
    "Clock",
    "ControllerSnapshot",
    "ManualClock",
    "ScheduledTask",
    "TaskStore",
    "TaskTimerController",
    "TimerEngine",
    "WallClock",
    "create_controller",
]
