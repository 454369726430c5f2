"""Task data models.

A task file is a JSON array of task records. Only the stored fields are
serialised; a task's status is derived from its dates every time it is read.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

MAX_DESCRIPTION_LENGTH = 200


def to_local_naive(value: datetime) -> datetime:
    """Convert an offset-aware timestamp to naive local time.

    Naive values pass through unchanged, so every stored timestamp can be
    compared with the local clock.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class TaskStatus(str, Enum):
    """Status of a task, computed on read."""

    PENDING = "Pending"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"


def derive_status(
    completed_date: datetime | None,
    due_date: datetime | None,
    now: datetime,
) -> TaskStatus:
    """Compute a task's status from its dates."""
    if completed_date is not None:
        return TaskStatus.COMPLETED
    if due_date is not None and due_date < now:
        return TaskStatus.OVERDUE
    return TaskStatus.PENDING


class TaskItem(BaseModel):
    """A single todo item as stored in the task file."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(gt=0)
    description: str = Field(min_length=1, max_length=MAX_DESCRIPTION_LENGTH)
    created_date: datetime
    due_date: datetime | None = None
    completed_date: datetime | None = None

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("description cannot be blank")
        return value

    @field_validator("created_date", "due_date", "completed_date")
    @classmethod
    def _naive_local_time(cls, value: datetime | None) -> datetime | None:
        return to_local_naive(value) if value is not None else None

    @property
    def is_completed(self) -> bool:
        return self.completed_date is not None

    @property
    def status(self) -> TaskStatus:
        """Status as of the current time."""
        return self.status_at(datetime.now())

    def status_at(self, now: datetime) -> TaskStatus:
        return derive_status(self.completed_date, self.due_date, now)


_TASK_LIST = TypeAdapter(list[TaskItem])


@dataclass
class TaskCollection:
    """Ordered set of tasks keyed by id."""

    items: list[TaskItem] = field(default_factory=list)

    def __post_init__(self) -> None:
        seen: set[int] = set()
        for item in self.items:
            if item.id in seen:
                raise ValueError(f"Duplicate task id {item.id}")
            seen.add(item.id)

    def __iter__(self) -> Iterator[TaskItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, task_id: object) -> bool:
        return any(item.id == task_id for item in self.items)

    @property
    def ids(self) -> list[int]:
        return [item.id for item in self.items]

    def next_id(self) -> int:
        """Return the id the next new task should get."""
        return max(self.ids, default=0) + 1

    def get(self, task_id: int) -> TaskItem | None:
        """Get a task by id."""
        for item in self.items:
            if item.id == task_id:
                return item
        return None

    def append(self, item: TaskItem) -> None:
        """Add a task, keeping ids unique."""
        if item.id in self:
            raise ValueError(f"Duplicate task id {item.id}")
        self.items.append(item)

    def remove(self, task_id: int) -> TaskItem | None:
        """Remove and return a task, or None if no task has that id."""
        item = self.get(task_id)
        if item is not None:
            self.items.remove(item)
        return item

    def to_json(self) -> str:
        """Serialise the collection as an indented JSON array."""
        return _TASK_LIST.dump_json(self.items, by_alias=True, indent=2).decode("utf-8")

    @classmethod
    def from_json(cls, text: str) -> TaskCollection:
        """Parse a JSON array of task records.

        Raises:
            pydantic.ValidationError: If the text is not valid JSON or a record is invalid
            ValueError: If two records share an id
        """
        return cls(_TASK_LIST.validate_json(text))


@dataclass
class TaskSummary:
    """Counts of tasks per status."""

    total: int = 0
    pending: int = 0
    overdue: int = 0
    completed: int = 0

    @classmethod
    def from_tasks(cls, tasks: Iterable[TaskItem], now: datetime) -> TaskSummary:
        summary = cls()
        for task in tasks:
            summary.total += 1
            status = task.status_at(now)
            if status is TaskStatus.COMPLETED:
                summary.completed += 1
            elif status is TaskStatus.OVERDUE:
                summary.overdue += 1
            else:
                summary.pending += 1
        return summary
