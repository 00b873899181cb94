"""Exceptions raised by the task timer core."""


class TaskTimerError(Exception):
    """Base class for task timer errors."""


class TaskNotFoundError(TaskTimerError):
    """No task matches the given id or id prefix."""

    def __init__(self, identifier: str, message: str | None = None):
        super().__init__(message or f"Task '{identifier}' not found")
        self.identifier = identifier


class PersistenceError(TaskTimerError):
    """Reading or writing the key-value store failed."""


class InvalidDurationError(TaskTimerError, ValueError):
    """Timer duration must be a whole number of minutes, at least one."""


class ConfigError(TaskTimerError):
    """Configuration file could not be loaded or saved."""
