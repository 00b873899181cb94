"""Unit tests for task_timer.services.clock."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from task_timer.services.clock import AsyncioClock, ManualClock, ScheduledTask


class TestScheduledTask:
    def test_cancel_is_idempotent(self):
        calls = []
        task = ScheduledTask(1.0, lambda: None)
        task._on_cancel = lambda: calls.append(1)
        task.cancel()
        task.cancel()
        assert task.cancelled
        assert calls == [1]

    def test_interval_must_be_positive(self):
        with pytest.raises(ValueError):
            ScheduledTask(0, lambda: None)


class TestManualClock:
    def test_fires_once_per_interval(self):
        clock = ManualClock()
        calls = []
        clock.schedule_every(1.0, lambda: calls.append(clock.elapsed))
        clock.advance(3)
        assert calls == [1.0, 2.0, 3.0]

    def test_partial_advance_does_not_fire(self):
        clock = ManualClock()
        calls = []
        clock.schedule_every(1.0, lambda: calls.append(1))
        clock.advance(0.5)
        assert calls == []
        clock.advance(0.5)
        assert calls == [1]

    def test_cancelled_task_stops_firing(self):
        clock = ManualClock()
        calls = []
        task = clock.schedule_every(1.0, lambda: calls.append(1))
        clock.advance(2)
        task.cancel()
        clock.advance(5)
        assert len(calls) == 2
        assert clock.active_tasks == 0

    def test_registration_order(self):
        clock = ManualClock()
        order = []
        clock.schedule_every(1.0, lambda: order.append("a"))
        clock.schedule_every(1.0, lambda: order.append("b"))
        clock.advance(2)
        assert order == ["a", "b", "a", "b"]

    def test_cancel_from_callback(self):
        clock = ManualClock()
        calls = []

        def callback():
            calls.append(1)
            if len(calls) == 3:
                task.cancel()

        task = clock.schedule_every(1.0, callback)
        clock.advance(10)
        assert len(calls) == 3

    def test_task_scheduled_in_callback_starts_next_interval(self):
        clock = ManualClock()
        late = []

        def schedule_more():
            if not late:
                clock.schedule_every(1.0, lambda: late.append(clock.elapsed))
                late.append("scheduled")

        clock.schedule_every(5.0, schedule_more)
        clock.advance(7)
        assert late == ["scheduled", 6.0, 7.0]

    def test_now_follows_elapsed_time(self):
        start = datetime(2025, 10, 21, 9, 0, tzinfo=timezone.utc)
        clock = ManualClock(start)
        clock.advance(90)
        assert clock.now() == start + timedelta(seconds=90)


class TestAsyncioClock:
    @pytest.mark.asyncio
    async def test_fires_on_running_loop(self):
        clock = AsyncioClock()
        fired = asyncio.Event()
        calls = []

        def callback():
            calls.append(1)
            if len(calls) == 2:
                task.cancel()
                fired.set()

        task = clock.schedule_every(0.01, callback)
        await asyncio.wait_for(fired.wait(), timeout=2)
        await asyncio.sleep(0.05)
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_cancel_before_first_tick(self):
        clock = AsyncioClock()
        calls = []
        task = clock.schedule_every(0.01, lambda: calls.append(1))
        task.cancel()
        await asyncio.sleep(0.05)
        assert calls == []

    def test_requires_running_loop(self):
        with pytest.raises(RuntimeError):
            AsyncioClock().schedule_every(1.0, lambda: None)
