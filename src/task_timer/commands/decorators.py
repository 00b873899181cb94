"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import typer

from task_timer.models.exceptions import (
    ConfigError,
    InvalidDurationError,
    TaskNotFoundError,
)
from task_timer.utils import exit_codes
from task_timer.utils.logger import get_logger
from task_timer.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _as_app_error(error: Exception) -> AppError | None:
    if isinstance(error, AppError):
        return error
    if isinstance(error, TaskNotFoundError):
        return AppError(str(error), exit_codes.ERROR_NOT_FOUND)
    if isinstance(error, InvalidDurationError):
        return AppError(str(error), exit_codes.ERROR_INVALID_ARGS)
    if isinstance(error, ConfigError):
        return AppError(str(error), exit_codes.ERROR_CONFIG)
    if isinstance(error, (KeyError, ValueError)):
        return AppError(str(error), exit_codes.ERROR_INVALID_ARGS)
    return None


def command_wrapper(_func: Callable | None = None):
    """Decorator to wrap command functions with logging and error mapping."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                if asyncio.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except typer.Exit:
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                app_error = _as_app_error(e)
                if app_error is not None:
                    logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
                    format_error(str(app_error))
                    raise typer.Exit(code=app_error.exit_code) from e

                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
