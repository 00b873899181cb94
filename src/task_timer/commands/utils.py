"""Shared helpers for commands."""

from __future__ import annotations

from task_timer.services.clock import AsyncioClock, Clock
from task_timer.services.config_service import get_config_service
from task_timer.services.controller import TaskTimerController, create_controller
from task_timer.utils.logger import get_logger


def get_controller(clock: Clock | None = None) -> TaskTimerController:
    """Build a controller from the active configuration."""
    config_service = get_config_service()
    config = config_service.config
    get_logger(config.logging.level)
    return create_controller(
        config,
        clock or AsyncioClock(),
        data_dir=config_service.data_dir,
    )
