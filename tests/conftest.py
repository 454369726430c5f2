"""Shared fixtures for todoapp tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from todoapp.models import TaskCollection, TaskItem
from todoapp.repository import TaskRepository
from todoapp.storage import JsonTaskStorage

NOW = datetime(2026, 10, 18, 12, 0, 0)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tasks_file(tmp_path: Path) -> Path:
    """Path of a tasks file that does not exist yet."""
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def storage(tasks_file: Path, clock: FakeClock) -> JsonTaskStorage:
    return JsonTaskStorage(tasks_file, clock=clock)


@pytest.fixture
def repository(storage: JsonTaskStorage, clock: FakeClock) -> TaskRepository:
    return TaskRepository(storage, clock=clock)


@pytest.fixture
def sample_tasks() -> list[TaskItem]:
    """A pending, an overdue and a completed task."""
    return [
        TaskItem(
            id=1,
            description="Buy milk",
            created_date=datetime(2026, 10, 10, 9, 0, 0),
        ),
        TaskItem(
            id=2,
            description="File taxes",
            created_date=datetime(2026, 10, 11, 9, 0, 0),
            due_date=datetime(2026, 10, 17, 23, 59, 59),
        ),
        TaskItem(
            id=5,
            description="Call the plumber",
            created_date=datetime(2026, 10, 12, 9, 0, 0),
            due_date=datetime(2026, 10, 20, 23, 59, 59),
            completed_date=datetime(2026, 10, 13, 15, 30, 0),
        ),
    ]


@pytest.fixture
def write_tasks(tasks_file: Path) -> Callable[[list[dict]], Path]:
    """Write raw task records to the tasks file."""

    def _write(records: list[dict]) -> Path:
        tasks_file.parent.mkdir(parents=True, exist_ok=True)
        tasks_file.write_text(json.dumps(records, indent=2), encoding="utf-8")
        return tasks_file

    return _write


@pytest.fixture
def populated_storage(storage: JsonTaskStorage, sample_tasks: list[TaskItem]) -> JsonTaskStorage:
    """Storage whose file already holds the sample tasks."""
    storage.backups = False
    assert storage.save(TaskCollection(sample_tasks))
    storage.backups = True
    return storage
