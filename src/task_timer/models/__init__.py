"""Task Timer domain models.

Pydantic models for tasks and configuration, plus the plain dataclass that
holds countdown timer state.
"""

from .config_models import AppConfig, LoggingConfig, StorageConfig, TasksConfig, TimerConfig
from .exceptions import (
    ConfigError,
    InvalidDurationError,
    PersistenceError,
    TaskNotFoundError,
    TaskTimerError,
)
from .task import Task, TaskPriority, TaskStatus
from .timer import (
    DEFAULT_TARGET_SECONDS,
    TimerEvent,
    TimerEventKind,
    TimerPhase,
    TimerState,
    format_remaining,
)

__all__ = [
    # Task models
    "Task",
    "TaskPriority",
    "TaskStatus",
    # Timer models
    "DEFAULT_TARGET_SECONDS",
    "TimerEvent",
    "TimerEventKind",
    "TimerPhase",
    "TimerState",
    "format_remaining",
    # Config models
    "AppConfig",
    "LoggingConfig",
    "StorageConfig",
    "TasksConfig",
    "TimerConfig",
    # Errors
    "ConfigError",
    "InvalidDurationError",
    "PersistenceError",
    "TaskNotFoundError",
    "TaskTimerError",
]
