"""File-backed key-value store: one file per key under a data directory."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from platformdirs import user_data_dir

from task_timer.models.exceptions import PersistenceError
from task_timer.repositories.repository import KeyValueStore

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
_SUFFIX = ".blob"


class FileKeyValueStore(KeyValueStore):
    """Stores each key as ``<data_dir>/<key>.blob``."""

    def __init__(self, data_dir: Path | str | None = None):
        if data_dir is None:
            data_dir = Path(user_data_dir("task_timer"))
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key) or key in (".", ".."):
            raise PersistenceError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}{_SUFFIX}"

    def put(self, key: str, value: bytes) -> None:
        """Write *value* to a sibling temp file, then swap it over the blob."""
        path = self._path_for(key)
        tmp = path.with_suffix(".tmp")
        try:
            tmp.write_bytes(value)
            tmp.chmod(0o600)
            os.replace(tmp, path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise PersistenceError(f"Failed to write {path}: {e}") from e
        logger.debug("stored %d bytes under %s", len(value), key)

    def get(self, key: str) -> bytes | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            raise PersistenceError(f"Failed to read {path}: {e}") from e

    def delete(self, key: str) -> bool:
        path = self._path_for(key)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise PersistenceError(f"Failed to delete {path}: {e}") from e
        return True
