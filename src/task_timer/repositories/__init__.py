"""Repository interfaces for Task Timer."""

from .repository import SETTINGS_KEY, TASKS_KEY, KeyValueStore

__all__ = ["KeyValueStore", "TASKS_KEY", "SETTINGS_KEY"]
