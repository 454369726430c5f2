"""Task business logic on top of a storage backend."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, time

from todoapp.errors import (
    AlreadyCompletedError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from todoapp.models import (
    MAX_DESCRIPTION_LENGTH,
    TaskCollection,
    TaskItem,
    TaskSummary,
    to_local_naive,
)
from todoapp.storage import TaskStorage

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59)


def validate_description(description: str | None) -> str:
    """Return the trimmed description or raise ValidationError."""
    if description is None:
        raise ValidationError("Task description cannot be empty")

    cleaned = description.strip()
    if not cleaned:
        raise ValidationError("Task description cannot be empty")
    if len(cleaned) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Task description cannot exceed {MAX_DESCRIPTION_LENGTH} characters "
            f"(got {len(cleaned)})"
        )
    return cleaned


def validate_due_date(due_date: date | datetime | None, now: datetime) -> datetime | None:
    """Normalise a due date and reject dates before today.

    A plain ``date`` means the end of that day. Only the calendar date is
    compared, so any time today is accepted.
    Offset-aware values are converted to local time first.
    """
    if due_date is None:
        return None

    if not isinstance(due_date, datetime):
        due_date = datetime.combine(due_date, END_OF_DAY)
    else:
        due_date = to_local_naive(due_date)

    if due_date.date() < now.date():
        raise ValidationError(
            f"Due date {due_date.date().isoformat()} cannot be in the past"
        )
    return due_date


def validate_task_id(task_id: int) -> int:
    # bool is an int subclass
    if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id <= 0:
        raise ValidationError(f"Invalid task id: {task_id!r}")
    return task_id


class TaskRepository:
    """Validates and applies task operations.

    Every operation loads the collection, changes it and saves it back.
    Nothing is kept in memory between calls.
    """

    def __init__(
        self,
        storage: TaskStorage,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.storage = storage
        self.clock = clock

    def get_all(self) -> TaskCollection:
        """Load every task."""
        return self.storage.load()

    def add(self, description: str, due_date: date | datetime | None = None) -> TaskItem:
        """Create a task and persist it.

        Raises:
            ValidationError: If the description or due date is invalid
            PersistenceError: If the task could not be saved
        """
        now = self.clock()
        cleaned = validate_description(description)
        due = validate_due_date(due_date, now)

        collection = self.storage.load()
        task = TaskItem(
            id=collection.next_id(),
            description=cleaned,
            created_date=now,
            due_date=due,
        )
        collection.append(task)
        self._save(collection, f"add task {task.id}")

        logger.info("Added task %d", task.id)
        return task

    def complete(self, task_id: int) -> TaskItem:
        """Mark a task as completed.

        Raises:
            NotFoundError: If no task has ``task_id``
            AlreadyCompletedError: If the task was completed before
            PersistenceError: If the change could not be saved
        """
        validate_task_id(task_id)

        collection = self.storage.load()
        task = collection.get(task_id)
        if task is None:
            raise NotFoundError(task_id)
        if task.is_completed:
            raise AlreadyCompletedError(task_id)

        task.completed_date = self.clock()
        self._save(collection, f"complete task {task_id}")

        logger.info("Completed task %d", task_id)
        return task

    def delete(self, task_id: int) -> TaskItem:
        """Remove a task. Ids of the remaining tasks do not change.

        Raises:
            NotFoundError: If no task has ``task_id``
            PersistenceError: If the change could not be saved
        """
        validate_task_id(task_id)

        collection = self.storage.load()
        task = collection.remove(task_id)
        if task is None:
            raise NotFoundError(task_id)

        self._save(collection, f"delete task {task_id}")

        logger.info("Deleted task %d", task_id)
        return task

    def search(self, query: str) -> list[TaskItem]:
        """Find tasks whose description contains ``query``, ignoring case."""
        if query is None or not query.strip():
            raise ValidationError("Search text cannot be empty")

        needle = query.strip().casefold()
        return [task for task in self.storage.load() if needle in task.description.casefold()]

    def summary(self) -> TaskSummary:
        return TaskSummary.from_tasks(self.storage.load(), self.clock())

    def _save(self, collection: TaskCollection, action: str) -> None:
        if not self.storage.save(collection):
            raise PersistenceError(f"Could not save tasks ({action}). No changes were made.")
