"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from task_timer.adapters.memory_store import MemoryKeyValueStore
from task_timer.services.clock import ManualClock
from task_timer.services.task_store import TaskStore
from task_timer.services.timer_engine import TimerEngine


# ---------------------------------------------------------------------------
# Core components
# ---------------------------------------------------------------------------


@pytest.fixture()
def storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def store(storage) -> TaskStore:
    return TaskStore(storage)


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def engine(clock) -> TimerEngine:
    return TimerEngine(clock)


# ---------------------------------------------------------------------------
# Config / log isolation helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from task_timer.services.config_service import get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("task_timer.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("task_timer.services.config_service.user_data_dir", return_value=tmpdir):
            yield get_config_service()
    get_config_service.cache_clear()


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send the application log file to *tmp_path* and reset the singleton."""
    import task_timer.utils.logger as logger_mod

    original = logger_mod._logger
    logger_mod._logger = None
    logging.getLogger("task_timer").handlers.clear()
    logging.getLogger("task_timer").propagate = True

    with patch("task_timer.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield

    for handler in logging.getLogger("task_timer").handlers:
        handler.close()
    logging.getLogger("task_timer").handlers.clear()
    logging.getLogger("task_timer").propagate = True
    logger_mod._logger = original
