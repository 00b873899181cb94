"""Configuration models for Task Timer."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Key-value storage configuration."""

    backend: Literal["file", "memory"] = Field(default="file")
    data_dir: str | None = Field(
        default=None, description="Directory for stored blobs (platform default if unset)"
    )


class TimerConfig(BaseModel):
    """Countdown timer configuration."""

    default_minutes: int = Field(default=25, ge=1)


class TasksConfig(BaseModel):
    """Task list configuration."""

    seed_sample_tasks: bool = Field(default=True)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level


class AppConfig(BaseModel):
    """Main Task Timer configuration"""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    timer: TimerConfig = Field(default_factory=TimerConfig)
    tasks: TasksConfig = Field(default_factory=TasksConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
