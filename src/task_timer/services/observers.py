"""Explicit callback registration for state owners."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscribers(Generic[T]):
    """Ordered list of callbacks receiving one payload per notification."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[[T], None]] = []

    def __len__(self) -> int:
        return len(self._callbacks)

    def add(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register *callback*; the returned function unregisters it."""
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def notify(self, payload: T) -> None:
        # A failing subscriber must not stop the others or the caller's update.
        for callback in list(self._callbacks):
            try:
                callback(payload)
            except Exception:
                logger.exception("subscriber %r failed", callback)
