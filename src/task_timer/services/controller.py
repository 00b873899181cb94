"""Controller owning the task store, timer engine and wall clock.

Presentation code reads one ``ControllerSnapshot`` and subscribes once; the
controller fans in change notifications from its components.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from task_timer.adapters.file_store import FileKeyValueStore
from task_timer.adapters.memory_store import MemoryKeyValueStore
from task_timer.models.config_models import AppConfig
from task_timer.models.task import Task
from task_timer.models.timer import TimerEvent, TimerEventKind, TimerState
from task_timer.repositories.repository import KeyValueStore
from task_timer.services.clock import Clock
from task_timer.services.observers import Subscribers
from task_timer.services.task_store import TaskStore
from task_timer.services.timer_engine import TimerEngine
from task_timer.services.wall_clock import WallClock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ControllerSnapshot:
    """Everything a view needs to render."""

    tasks: tuple[Task, ...]
    current_task: Task | None
    timer: TimerState
    current_time: str
    current_date: str

    @property
    def timer_display(self) -> str:
        return self.timer.display


class TaskTimerController:
    def __init__(self, store: TaskStore, engine: TimerEngine, wall_clock: WallClock):
        self.store = store
        self.engine = engine
        self.wall_clock = wall_clock
        self._subscribers: Subscribers[ControllerSnapshot] = Subscribers()
        self._completion_subscribers: Subscribers[TimerEvent] = Subscribers()
        self._unsubscribe = [
            store.subscribe(lambda _tasks: self._changed()),
            engine.subscribe(self._on_timer_event),
            wall_clock.subscribe(lambda _clock: self._changed()),
        ]

    @property
    def current_task(self) -> Task | None:
        return self.store.first_incomplete()

    def snapshot(self) -> ControllerSnapshot:
        return ControllerSnapshot(
            tasks=self.store.tasks,
            current_task=self.store.first_incomplete(),
            timer=self.engine.state,
            current_time=self.wall_clock.current_time,
            current_date=self.wall_clock.current_date,
        )

    def subscribe(self, callback: Callable[[ControllerSnapshot], None]) -> Callable[[], None]:
        """Receive a fresh snapshot after every change."""
        return self._subscribers.add(callback)

    def on_timer_completed(self, callback: Callable[[TimerEvent], None]) -> Callable[[], None]:
        """Receive the completion event of each countdown."""
        return self._completion_subscribers.add(callback)

    def start(self) -> None:
        """Begin wall-clock updates."""
        self.wall_clock.start()

    def close(self) -> None:
        """Cancel every clock subscription and detach from components."""
        self.engine.dispose()
        self.wall_clock.stop()
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []

    def _on_timer_event(self, event: TimerEvent) -> None:
        if event.kind == TimerEventKind.COMPLETED:
            self._completion_subscribers.notify(event)
        self._changed()

    def _changed(self) -> None:
        if len(self._subscribers):
            self._subscribers.notify(self.snapshot())


def create_storage(config: AppConfig, data_dir: Path | None = None) -> KeyValueStore:
    if config.storage.backend == "memory":
        return MemoryKeyValueStore()
    return FileKeyValueStore(data_dir or config.storage.data_dir)


def create_controller(
    config: AppConfig,
    clock: Clock,
    storage: KeyValueStore | None = None,
    data_dir: Path | None = None,
) -> TaskTimerController:
    """Wire a controller from configuration.

    An empty task list is seeded with sample tasks when configured to.
    """
    store = TaskStore(storage or create_storage(config, data_dir))
    if not store and config.tasks.seed_sample_tasks:
        logger.info("task list empty, adding sample tasks")
        store.seed_sample_tasks()
    engine = TimerEngine(clock, default_target_seconds=config.timer.default_minutes * 60)
    return TaskTimerController(store, engine, WallClock(clock))
