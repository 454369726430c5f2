"""Error types raised by the task core.

Correctable errors (bad input, unknown ids) and blocking errors (unreadable
or unwritable task file) share the ``TodoError`` base so the command layer
can catch them in one place.
"""

from __future__ import annotations

from pathlib import Path


class TodoError(Exception):
    """Base class for all todoapp errors."""

    #: Whether the user can fix the problem by retrying with other input.
    correctable = False


class ValidationError(TodoError):
    """Input was rejected before any storage access."""

    correctable = True


class NotFoundError(TodoError):
    """No task carries the requested id."""

    correctable = True

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class AlreadyCompletedError(TodoError):
    """The task has already been completed."""

    correctable = True

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} is already completed")


class CorruptDataError(TodoError):
    """The task file exists but cannot be parsed."""

    def __init__(self, path: Path, detail: str = "") -> None:
        self.path = path
        message = f"The tasks file {path} is corrupted. Please check the file format."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class StorageIOError(TodoError):
    """The task file could not be read."""

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = path
        message = f"Unable to read the tasks file {path}. Please check file permissions."
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PersistenceError(TodoError):
    """Saving the task file failed; the change was not stored."""
