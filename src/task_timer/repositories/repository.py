"""Repository abstraction layer for Task Timer.

The core persists through a minimal key-value blob interface so that task
and timer logic stays independent of the storage mechanism (files, memory,
or a platform preferences store).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

TASKS_KEY = "savedTasks"
SETTINGS_KEY = "userSettings"


class KeyValueStore(ABC):
    """Abstract base class for blob storage keyed by short strings."""

    @abstractmethod
    def put(self, key: str, value: bytes) -> None:
        """Store *value* under *key*, replacing any previous value.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            PersistenceError: If the write fails
        """
        raise NotImplementedError("KeyValueStore.put() must be implemented by adapter")

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the value stored under *key*, or None if absent.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            PersistenceError: If the read fails
        """
        raise NotImplementedError("KeyValueStore.get() must be implemented by adapter")

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove *key*. Returns True if something was removed."""
        raise NotImplementedError(
            "KeyValueStore.delete() must be implemented by adapter"
        )
