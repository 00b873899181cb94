"""Task store - ordered task collection with completion partitions.

The list is always kept as every incomplete task followed by every completed
task, each partition ascending by ``sort_order``. Every mutation writes the
whole collection to the key-value store; a failed write is logged and the
in-memory state is kept.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Sequence

from pydantic import ValidationError

from task_timer.models.exceptions import PersistenceError, TaskNotFoundError
from task_timer.models.task import Task, TaskPriority
from task_timer.repositories.repository import TASKS_KEY, KeyValueStore
from task_timer.services.observers import Subscribers

logger = logging.getLogger(__name__)

SAMPLE_TASKS: tuple[dict, ...] = (
    {
        "title": "完成需求文档编写",
        "description": "整理 Task Timer 的详细需求",
        "priority": TaskPriority.HIGH,
        "tags": ["工作", "文档"],
        "estimated_duration": 120,
    },
    {
        "title": "回复邮件",
        "description": "处理今天收到的重要邮件",
        "priority": TaskPriority.MEDIUM,
        "tags": ["沟通"],
        "estimated_duration": 30,
    },
    {
        "title": "学习 SwiftUI",
        "description": "深入学习 SwiftUI 窗口管理",
        "priority": TaskPriority.LOW,
        "tags": ["学习", "技术"],
        "estimated_duration": 60,
    },
)


def is_partitioned(tasks: Sequence[Task]) -> bool:
    """True if no incomplete task follows a completed one."""
    seen_completed = False
    for task in tasks:
        if task.is_completed:
            seen_completed = True
        elif seen_completed:
            return False
    return True


def serialize_tasks(tasks: Iterable[Task]) -> bytes:
    """Encode tasks as a UTF-8 JSON array of task records."""
    records = [task.to_record() for task in tasks]
    return json.dumps(records, ensure_ascii=False).encode("utf-8")


def deserialize_tasks(data: bytes) -> list[Task]:
    """Decode a JSON array of task records.

    Raises:
        ValueError: If the payload is not a JSON array of valid records
    """
    records = json.loads(data.decode("utf-8"))
    if not isinstance(records, list):
        raise ValueError("task payload must be a JSON array")
    return [Task.from_record(record) for record in records]


class TaskStore:
    """Owns the ordered task list.

    All methods are synchronous and expect to be called from a single thread.
    """

    def __init__(self, storage: KeyValueStore, key: str = TASKS_KEY):
        """Initialize the store and load any persisted tasks.

        Args:
            storage: Key-value store receiving the serialized collection
            key: Storage key for the collection
        """
        self.storage = storage
        self.key = key
        self._tasks: list[Task] = []
        self._subscribers: Subscribers[tuple[Task, ...]] = Subscribers()
        self._completed: dict[str, bool] = {}
        self.load()

    # -------------------- queries --------------------

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self):
        return iter(tuple(self._tasks))

    def get(self, task_id: str) -> Task | None:
        return next((t for t in self._tasks if t.id == task_id), None)

    def index_of(self, task_id: str) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def resolve(self, prefix: str) -> Task:
        """Find the single task whose id starts with *prefix* (case-insensitive).

        Raises:
            TaskNotFoundError: If no task or more than one task matches
        """
        needle = prefix.strip().upper()
        if not needle:
            raise TaskNotFoundError(prefix)
        matches = [t for t in self._tasks if t.id.upper().startswith(needle)]
        if not matches:
            raise TaskNotFoundError(prefix)
        if len(matches) > 1:
            raise TaskNotFoundError(
                prefix, f"Task id prefix '{prefix}' is ambiguous ({len(matches)} matches)"
            )
        return matches[0]

    def first_incomplete(self) -> Task | None:
        return next((t for t in self._tasks if not t.is_completed), None)

    def search(self, text: str) -> list[Task]:
        """Tasks whose title or description contains *text*, in list order."""
        if not text:
            return list(self._tasks)
        return [t for t in self._tasks if t.matches(text)]

    def stats(self) -> dict[str, int]:
        completed = sum(1 for t in self._tasks if t.is_completed)
        return {
            "completed": completed,
            "incomplete": len(self._tasks) - completed,
            "total": len(self._tasks),
        }

    # -------------------- mutations --------------------

    def add(
        self,
        title: str,
        description: str | None = None,
        priority: TaskPriority = TaskPriority.MEDIUM,
        estimated_duration: int | None = None,
        tags: Iterable[str] = (),
    ) -> Task:
        """Create a task at the tail of the incomplete partition.

        Raises:
            ValueError: If the title is empty
        """
        if not title or not title.strip():
            raise ValueError("Task title must not be empty")

        fields: dict = {"title": title, "priority": priority, "tags": list(tags)}
        if description is not None:
            fields["task_description"] = description
        if estimated_duration is not None:
            fields["estimated_duration"] = estimated_duration
        task = Task(**fields)
        task.sort_order = self._max_order(completed=False, default=-1) + 1

        self._tasks.insert(0, task)
        self.reorder()
        logger.info("added task %s (sort_order=%d)", task.short_id, task.sort_order)
        self._commit()
        return task

    def toggle_completion(self, task_id: str) -> Task | None:
        """Flip completion and move the task to the tail of its new partition."""
        task = self.get(task_id)
        if task is None:
            logger.debug("toggle ignored, unknown task %s", task_id)
            return None

        if task.is_completed:
            task.mark_incomplete()
        else:
            task.mark_completed()

        self._send_to_tail(task)
        self.reorder()
        logger.info(
            "task %s %s (sort_order=%d)",
            task.short_id,
            "completed" if task.is_completed else "reopened",
            task.sort_order,
        )
        self._commit()
        return task

    def update(self, task: Task) -> bool:
        """Replace the task with the same id. Unknown ids are ignored.

        A change of completion state is detected against the last committed
        state, so a stored task edited in place and passed back still moves
        to the tail of its new partition with a matching status.
        """
        index = self.index_of(task.id)
        if index is None:
            logger.debug("update ignored, unknown task %s", task.id)
            return False
        was_completed = self._completed.get(task.id, self._tasks[index].is_completed)
        self._tasks[index] = task
        task.sync_status()
        if task.is_completed != was_completed:
            self._send_to_tail(task)
        self.reorder()
        self._commit()
        return True

    def delete(self, task_id: str) -> bool:
        index = self.index_of(task_id)
        if index is None:
            logger.debug("delete ignored, unknown task %s", task_id)
            return False
        removed = self._tasks.pop(index)
        logger.info("deleted task %s", removed.short_id)
        self._commit()
        return True

    def clear_completed(self) -> int:
        """Delete every completed task and return how many were removed."""
        remaining = [t for t in self._tasks if not t.is_completed]
        removed = len(self._tasks) - len(remaining)
        if removed:
            self._tasks = remaining
            logger.info("cleared %d completed task(s)", removed)
            self._commit()
        return removed

    def move(self, source_indices: Iterable[int], destination_index: int) -> bool:
        """Move the tasks at *source_indices* so they land before *destination_index*.

        Indices refer to the list before the move. A move that would mix the
        incomplete and completed partitions, or that names an index outside
        the list, is rejected and leaves the store untouched.

        Returns:
            True if the move was applied
        """
        sources = sorted(set(source_indices))
        size = len(self._tasks)
        if not sources:
            return False
        if sources[0] < 0 or sources[-1] >= size or not 0 <= destination_index <= size:
            logger.warning(
                "move rejected, index out of range: %s -> %d", sources, destination_index
            )
            return False

        moving = [self._tasks[i] for i in sources]
        chosen = set(sources)
        staying = [t for i, t in enumerate(self._tasks) if i not in chosen]
        insert_at = destination_index - sum(1 for i in sources if i < destination_index)
        candidate = staying[:insert_at] + moving + staying[insert_at:]

        if not is_partitioned(candidate):
            logger.info("move rejected, crosses completion boundary: %s -> %d",
                        sources, destination_index)
            return False

        for position, task in enumerate(candidate):
            task.sort_order = position
        self._tasks = candidate
        self._commit()
        return True

    def reorder(self) -> None:
        """Rebuild the list as incomplete then completed, each by sort_order."""
        incomplete = sorted((t for t in self._tasks if not t.is_completed),
                            key=lambda t: t.sort_order)
        completed = sorted((t for t in self._tasks if t.is_completed),
                           key=lambda t: t.sort_order)
        self._tasks = incomplete + completed

    def seed_sample_tasks(self) -> list[Task]:
        """Add the starter tasks shown on a first run."""
        return [self.add(**sample) for sample in SAMPLE_TASKS]

    def subscribe(self, callback: Callable[[tuple[Task, ...]], None]) -> Callable[[], None]:
        """Call *callback* with the task tuple after every mutation."""
        return self._subscribers.add(callback)

    # -------------------- persistence --------------------

    def load(self) -> None:
        """Replace the in-memory list with the persisted one.

        A missing or unreadable payload leaves the store empty.
        """
        try:
            data = self.storage.get(self.key)
        except PersistenceError as e:
            logger.warning("could not read tasks: %s", e)
            data = None

        if data is None:
            self._tasks = []
            return
        try:
            self._tasks = deserialize_tasks(data)
        except (ValueError, ValidationError) as e:
            logger.warning("discarding unreadable task payload: %s", e)
            self._tasks = []
            return
        self.reorder()
        self._remember_completion()
        logger.debug("loaded %d task(s)", len(self._tasks))

    def save(self) -> bool:
        """Write the collection; returns False if the write failed."""
        try:
            self.storage.put(self.key, serialize_tasks(self._tasks))
        except (PersistenceError, TypeError, ValueError) as e:
            logger.warning("could not save tasks: %s", e)
            return False
        return True

    def _commit(self) -> None:
        self._remember_completion()
        self.save()
        self._subscribers.notify(self.tasks)

    def _remember_completion(self) -> None:
        self._completed = {t.id: t.is_completed for t in self._tasks}

    def _send_to_tail(self, task: Task) -> None:
        """Give *task* the next sort_order of its partition, else of the other one."""
        target = self._max_order(completed=task.is_completed, exclude=task.id)
        if target is None:
            target = self._max_order(completed=not task.is_completed, exclude=task.id)
        task.sort_order = 0 if target is None else target + 1

    def _max_order(self, *, completed: bool, exclude: str | None = None, default=None):
        orders = [
            t.sort_order for t in self._tasks
            if t.is_completed == completed and t.id != exclude
        ]
        return max(orders) if orders else default


__all__ = [
    "SAMPLE_TASKS",
    "TaskStore",
    "deserialize_tasks",
    "is_partitioned",
    "serialize_tasks",
]
