"""In-memory key-value store."""

from __future__ import annotations

from task_timer.repositories.repository import KeyValueStore


class MemoryKeyValueStore(KeyValueStore):
    """Keeps blobs in a dict. Nothing survives the process."""

    def __init__(self, initial: dict[str, bytes] | None = None):
        self._data: dict[str, bytes] = dict(initial or {})

    def put(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def get(self, key: str) -> bytes | None:
        return self._data.get(key)

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None
