"""Task data models.

A task record is persisted with camelCase keys in declaration order::

    {"id": ..., "title": ..., "taskDescription": ..., "priority": "M",
     "status": "待办", "isCompleted": false, "tags": [...],
     "estimatedDuration": ..., "actualDuration": ..., "createdAt": ...,
     "completedAt": ..., "sortOrder": 0}

Optional fields holding ``None`` are left out of the record unless the record
the task was loaded from spelled them out as ``null``.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator


class TaskPriority(str, Enum):
    """Priority level, stored as a single letter."""

    HIGH = "H"
    MEDIUM = "M"
    LOW = "L"


class TaskStatus(str, Enum):
    """Display label for a task. Derived from ``is_completed``."""

    TODO = "待办"
    IN_PROGRESS = "进行中"
    COMPLETED = "已完成"
    ARCHIVED = "已归档"


OPTIONAL_FIELDS: tuple[str, ...] = (
    "task_description",
    "estimated_duration",
    "actual_duration",
    "completed_at",
)


def new_task_id() -> str:
    """Generate a task id in the uppercase UUID form used by stored records."""
    return str(uuid.uuid4()).upper()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Task(BaseModel):
    """A single todo item.

    Attributes:
        id: Opaque unique identifier, never changed after creation
        title: Non-empty title
        task_description: Optional longer description
        priority: High, medium or low
        status: Display label kept in line with ``is_completed``
        is_completed: Completion flag, the source of truth for ``status``
        tags: Ordered tags, duplicates allowed
        estimated_duration: Estimated minutes
        actual_duration: Minutes actually spent
        created_at: Creation timestamp
        completed_at: Completion timestamp, set only while completed
        sort_order: Position inside the task's partition
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_task_id)
    title: str = Field(min_length=1)
    task_description: str | None = Field(default=None, alias="taskDescription")
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    is_completed: bool = Field(default=False, alias="isCompleted")
    tags: list[str] = Field(default_factory=list)
    estimated_duration: int | None = Field(default=None, alias="estimatedDuration")
    actual_duration: int | None = Field(default=None, alias="actualDuration")
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")
    completed_at: datetime | None = Field(default=None, alias="completedAt")
    sort_order: int = Field(default=0, alias="sortOrder")

    _explicit_nulls: set[str] = PrivateAttr(default_factory=set)

    @model_validator(mode="before")
    @classmethod
    def _derive_status(cls, data: Any) -> Any:
        """Align ``status`` with the completion flag."""
        if not isinstance(data, dict):
            return data
        completed = data.get("isCompleted", data.get("is_completed", False))
        data = dict(data)
        if completed in (True, "true"):
            data["status"] = TaskStatus.COMPLETED
        elif data.get("status") == TaskStatus.COMPLETED.value:
            data["status"] = TaskStatus.TODO
        return data

    @property
    def short_id(self) -> str:
        return self.id[:8]

    def mark_completed(self, at: datetime | None = None) -> None:
        self.is_completed = True
        self.status = TaskStatus.COMPLETED
        self.completed_at = at or utcnow()

    def mark_incomplete(self) -> None:
        self.is_completed = False
        self.status = TaskStatus.TODO
        self.completed_at = None

    def sync_status(self) -> None:
        """Re-derive ``status`` and ``completed_at`` from ``is_completed``.

        Needed after the flag was assigned directly or through
        ``model_copy(update=...)``, which bypass validation.
        """
        if self.is_completed:
            self.mark_completed(self.completed_at)
        elif self.status == TaskStatus.COMPLETED or self.completed_at is not None:
            self.mark_incomplete()

    def matches(self, text: str) -> bool:
        """Case-insensitive match against title and description."""
        needle = text.casefold()
        if needle in self.title.casefold():
            return True
        return self.task_description is not None and needle in self.task_description.casefold()

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted record shape."""
        record = self.model_dump(mode="json", by_alias=True)
        for name in OPTIONAL_FIELDS:
            key = type(self).model_fields[name].alias or name
            if record[key] is None and key not in self._explicit_nulls:
                del record[key]
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Task:
        """Build a task from a persisted record, remembering explicit nulls."""
        task = cls.model_validate(record)
        task._explicit_nulls = {key for key, value in record.items() if value is None}
        return task
