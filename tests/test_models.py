"""Tests for todoapp.models module."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError as PydanticValidationError

from todoapp.models import (
    MAX_DESCRIPTION_LENGTH,
    TaskCollection,
    TaskItem,
    TaskStatus,
    TaskSummary,
    derive_status,
)

NOW = datetime(2026, 10, 18, 12, 0, 0)


class TestDeriveStatus:
    """Tests for status derivation."""

    def test_pending_without_dates(self) -> None:
        assert derive_status(None, None, NOW) is TaskStatus.PENDING

    def test_pending_with_future_due_date(self) -> None:
        assert derive_status(None, NOW + timedelta(days=1), NOW) is TaskStatus.PENDING

    def test_overdue_when_due_date_passed(self) -> None:
        """An item due yesterday and not completed is overdue."""
        assert derive_status(None, NOW - timedelta(days=1), NOW) is TaskStatus.OVERDUE

    def test_overdue_compares_time_of_day(self) -> None:
        assert derive_status(None, NOW - timedelta(minutes=1), NOW) is TaskStatus.OVERDUE
        assert derive_status(None, NOW, NOW) is TaskStatus.PENDING

    def test_completed_wins_over_due_date(self) -> None:
        status = derive_status(NOW, NOW - timedelta(days=1), NOW)
        assert status is TaskStatus.COMPLETED


class TestTaskItem:
    """Tests for TaskItem model."""

    def test_defaults(self) -> None:
        task = TaskItem(id=1, description="Write report", created_date=NOW)
        assert task.due_date is None
        assert task.completed_date is None
        assert not task.is_completed
        assert task.status_at(NOW) is TaskStatus.PENDING

    def test_status_recomputed_on_read(self) -> None:
        task = TaskItem(
            id=1,
            description="Write report",
            created_date=NOW,
            due_date=NOW + timedelta(hours=1),
        )
        assert task.status_at(NOW) is TaskStatus.PENDING
        assert task.status_at(NOW + timedelta(hours=2)) is TaskStatus.OVERDUE

        task.completed_date = NOW
        assert task.status_at(NOW + timedelta(hours=2)) is TaskStatus.COMPLETED

    def test_status_property_uses_current_time(self) -> None:
        task = TaskItem(
            id=1,
            description="Old task",
            created_date=datetime(2000, 1, 1),
            due_date=datetime(2000, 1, 2),
        )
        assert task.status is TaskStatus.OVERDUE

    def test_serialises_camel_case_without_status(self) -> None:
        task = TaskItem(id=3, description="Write report", created_date=NOW)
        data = task.model_dump(mode="json", by_alias=True)
        assert data == {
            "id": 3,
            "description": "Write report",
            "createdDate": "2026-10-18T12:00:00",
            "dueDate": None,
            "completedDate": None,
        }

    def test_accepts_camel_case_keys(self) -> None:
        task = TaskItem.model_validate(
            {
                "id": 2,
                "description": "Pay rent",
                "createdDate": "2026-10-01T08:00:00",
                "dueDate": "2026-10-31T00:00:00",
                "completedDate": None,
            }
        )
        assert task.created_date == datetime(2026, 10, 1, 8, 0, 0)
        assert task.due_date == datetime(2026, 10, 31)

    @pytest.mark.parametrize("task_id", [0, -1])
    def test_rejects_non_positive_id(self, task_id: int) -> None:
        with pytest.raises(PydanticValidationError):
            TaskItem(id=task_id, description="x", created_date=NOW)

    def test_rejects_long_description(self) -> None:
        with pytest.raises(PydanticValidationError):
            TaskItem(id=1, description="x" * (MAX_DESCRIPTION_LENGTH + 1), created_date=NOW)

    @pytest.mark.parametrize("description", ["   ", "\t\n"])
    def test_rejects_blank_description(self, description: str) -> None:
        with pytest.raises(PydanticValidationError):
            TaskItem(id=1, description=description, created_date=NOW)

    def test_offset_aware_dates_become_naive_local_time(self) -> None:
        aware = datetime(2026, 10, 20, 9, 0, 0, tzinfo=timezone.utc)
        task = TaskItem(
            id=1, description="x", created_date=aware, due_date=aware, completed_date=aware
        )

        expected = aware.astimezone().replace(tzinfo=None)
        assert task.created_date == expected
        assert task.due_date == expected
        assert task.completed_date == expected
        assert task.status_at(NOW) is TaskStatus.COMPLETED

    def test_naive_dates_are_unchanged(self) -> None:
        task = TaskItem(id=1, description="x", created_date=NOW)
        assert task.created_date == NOW


class TestTaskCollection:
    """Tests for TaskCollection."""

    def test_empty(self) -> None:
        collection = TaskCollection()
        assert len(collection) == 0
        assert collection.next_id() == 1
        assert collection.get(1) is None

    def test_next_id_is_max_plus_one(self, sample_tasks: list[TaskItem]) -> None:
        collection = TaskCollection(sample_tasks)
        assert collection.next_id() == 6

    def test_get_and_contains(self, sample_tasks: list[TaskItem]) -> None:
        collection = TaskCollection(sample_tasks)
        assert collection.get(2).description == "File taxes"
        assert 5 in collection
        assert 3 not in collection

    def test_append_rejects_duplicate_id(self, sample_tasks: list[TaskItem]) -> None:
        collection = TaskCollection(sample_tasks)
        with pytest.raises(ValueError, match="Duplicate task id 1"):
            collection.append(TaskItem(id=1, description="Again", created_date=NOW))

    def test_constructor_rejects_duplicate_ids(self) -> None:
        items = [
            TaskItem(id=1, description="a", created_date=NOW),
            TaskItem(id=1, description="b", created_date=NOW),
        ]
        with pytest.raises(ValueError):
            TaskCollection(items)

    def test_remove_keeps_order_and_other_ids(self, sample_tasks: list[TaskItem]) -> None:
        collection = TaskCollection(sample_tasks)
        removed = collection.remove(2)
        assert removed is not None
        assert removed.id == 2
        assert collection.ids == [1, 5]

    def test_remove_missing_returns_none(self) -> None:
        assert TaskCollection().remove(42) is None

    def test_to_json_is_indented_array(self, sample_tasks: list[TaskItem]) -> None:
        text = TaskCollection(sample_tasks).to_json()
        assert text.startswith("[\n  {")
        data = json.loads(text)
        assert [item["id"] for item in data] == [1, 2, 5]
        assert data[0]["dueDate"] is None
        assert data[2]["completedDate"] == "2026-10-13T15:30:00"

    def test_json_round_trip(self, sample_tasks: list[TaskItem]) -> None:
        collection = TaskCollection(sample_tasks)
        assert TaskCollection.from_json(collection.to_json()) == collection

    def test_from_json_rejects_invalid_json(self) -> None:
        with pytest.raises(ValueError):
            TaskCollection.from_json("{not json")

    def test_from_json_rejects_wrong_shape(self) -> None:
        with pytest.raises(ValueError):
            TaskCollection.from_json('{"tasks": []}')


class TestTaskSummary:
    """Tests for TaskSummary."""

    def test_counts_by_status(self, sample_tasks: list[TaskItem]) -> None:
        summary = TaskSummary.from_tasks(sample_tasks, NOW)
        assert summary == TaskSummary(total=3, pending=1, overdue=1, completed=1)

    def test_empty(self) -> None:
        assert TaskSummary.from_tasks([], NOW) == TaskSummary()
