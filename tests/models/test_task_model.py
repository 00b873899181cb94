"""Unit tests for task_timer.models.task.

Covers defaults, status derivation from the completion flag, persisted
record shape (aliases, key order, null-versus-missing) and search matching.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from task_timer.models.task import Task, TaskPriority, TaskStatus, new_task_id


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _record(**overrides) -> dict:
    record = {
        "id": "6F9619FF-8B86-D011-B42D-00C04FC964FF",
        "title": "Write report",
        "taskDescription": "Draft the requirements",
        "priority": "H",
        "status": "待办",
        "isCompleted": False,
        "tags": ["work", "docs", "work"],
        "estimatedDuration": 120,
        "actualDuration": 30,
        "createdAt": "2025-10-21T08:30:00Z",
        "completedAt": None,
        "sortOrder": 3,
    }
    record.update(overrides)
    return record


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestTaskDefaults:
    def test_minimal_task(self):
        task = Task(title="Review")
        assert task.priority == TaskPriority.MEDIUM
        assert task.status == TaskStatus.TODO
        assert task.is_completed is False
        assert task.tags == []
        assert task.task_description is None
        assert task.completed_at is None
        assert task.sort_order == 0
        assert task.created_at.tzinfo is not None

    def test_ids_are_unique_uppercase_uuids(self):
        a, b = new_task_id(), new_task_id()
        assert a != b
        assert a == a.upper()
        assert len(a) == 36

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            Task(title="")

    def test_short_id(self):
        task = Task(id="ABCDEF12-0000-0000-0000-000000000000", title="x")
        assert task.short_id == "ABCDEF12"


# ---------------------------------------------------------------------------
# Status derivation
# ---------------------------------------------------------------------------


class TestStatusDerivation:
    def test_completed_flag_forces_completed_status(self):
        task = Task.from_record(_record(isCompleted=True, status="待办"))
        assert task.status == TaskStatus.COMPLETED

    def test_incomplete_task_cannot_be_labelled_completed(self):
        task = Task.from_record(_record(isCompleted=False, status="已完成"))
        assert task.status == TaskStatus.TODO

    @pytest.mark.parametrize("status", [TaskStatus.IN_PROGRESS, TaskStatus.ARCHIVED])
    def test_other_labels_survive_on_incomplete_tasks(self, status):
        task = Task.from_record(_record(status=status.value))
        assert task.status == status

    def test_mark_completed_and_incomplete(self):
        task = Task(title="x")
        moment = datetime(2025, 10, 21, 12, 0, tzinfo=timezone.utc)

        task.mark_completed(moment)
        assert task.is_completed is True
        assert task.status == TaskStatus.COMPLETED
        assert task.completed_at == moment

        task.mark_incomplete()
        assert task.is_completed is False
        assert task.status == TaskStatus.TODO
        assert task.completed_at is None

    def test_sync_status_after_copy(self):
        moment = datetime(2025, 10, 21, 12, 0, tzinfo=timezone.utc)
        done = Task(title="x").model_copy(update={"is_completed": True})
        assert done.status == TaskStatus.TODO
        done.sync_status()
        assert done.status == TaskStatus.COMPLETED
        assert done.completed_at is not None

        kept = Task(title="x", is_completed=True, completed_at=moment)
        kept.sync_status()
        assert kept.completed_at == moment

        reopened = kept.model_copy(update={"is_completed": False})
        reopened.sync_status()
        assert reopened.status == TaskStatus.TODO
        assert reopened.completed_at is None

    def test_sync_status_keeps_in_progress_label(self):
        task = Task(title="x", status=TaskStatus.IN_PROGRESS)
        task.sync_status()
        assert task.status == TaskStatus.IN_PROGRESS
        assert task.completed_at is None


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


class TestRecords:
    def test_record_uses_persisted_keys_in_order(self):
        record = Task.from_record(_record()).to_record()
        assert list(record) == [
            "id",
            "title",
            "taskDescription",
            "priority",
            "status",
            "isCompleted",
            "tags",
            "estimatedDuration",
            "actualDuration",
            "createdAt",
            "completedAt",
            "sortOrder",
        ]

    def test_round_trip_is_field_for_field(self):
        original = _record()
        assert Task.from_record(original).to_record() == original

    def test_round_trip_is_byte_identical(self):
        first = json.dumps(Task.from_record(_record()).to_record(), ensure_ascii=False)
        second = json.dumps(Task.from_record(json.loads(first)).to_record(), ensure_ascii=False)
        assert first == second

    def test_missing_optionals_stay_missing(self):
        original = _record()
        for key in ("taskDescription", "estimatedDuration", "actualDuration", "completedAt"):
            del original[key]
        record = Task.from_record(original).to_record()
        assert "taskDescription" not in record
        assert "completedAt" not in record
        assert record == original

    def test_explicit_nulls_stay_null(self):
        original = _record(taskDescription=None, estimatedDuration=None)
        record = Task.from_record(original).to_record()
        assert record["taskDescription"] is None
        assert record["estimatedDuration"] is None

    def test_new_task_omits_unset_optionals(self):
        record = Task(title="Review").to_record()
        assert "taskDescription" not in record
        assert "completedAt" not in record
        assert record["priority"] == "M"
        assert record["status"] == "待办"

    def test_missing_sort_order_defaults_to_zero(self):
        original = _record()
        del original["sortOrder"]
        assert Task.from_record(original).sort_order == 0

    def test_unknown_priority_rejected(self):
        with pytest.raises(ValidationError):
            Task.from_record(_record(priority="X"))


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


class TestMatches:
    def test_title_match_is_case_insensitive(self):
        assert Task(title="Write Report").matches("report")

    def test_description_match(self):
        assert Task(title="x", task_description="Reply to EMAIL").matches("email")

    def test_no_match(self):
        assert not Task(title="x").matches("y")
