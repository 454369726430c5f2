"""Task file storage.

The whole task collection lives in one JSON document. Every load reads the
file from disk; every save rewrites it through a temporary file in the same
directory which is then moved over the original, so the primary file is
always either the old complete document or the new complete document.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Protocol

from todoapp.errors import CorruptDataError, StorageIOError
from todoapp.models import TaskCollection

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
TEMP_PREFIX = ".tasks_"
TEMP_SUFFIX = ".tmp"


class TaskStorage(Protocol):
    """Interface for task collection backends."""

    def load(self) -> TaskCollection:
        """Load the full collection.

        Raises:
            CorruptDataError: If stored content cannot be parsed
            StorageIOError: If the backing store cannot be read
        """
        ...

    def save(self, collection: TaskCollection) -> bool:
        """Replace the stored collection. Returns False instead of raising."""
        ...

    def backup(self) -> bool:
        """Copy the current stored collection aside."""
        ...


def backup_path_for(path: Path, when: datetime) -> Path:
    """Return the backup path for ``path`` taken at ``when``.

    ``tasks.json`` becomes ``tasks.backup_20250110_093000.json``.
    """
    stamp = when.strftime(BACKUP_TIMESTAMP_FORMAT)
    return path.with_name(f"{path.stem}.backup_{stamp}{path.suffix}")


class JsonTaskStorage:
    """Stores tasks as an indented JSON array at a fixed path."""

    def __init__(
        self,
        path: Path,
        clock: Callable[[], datetime] = datetime.now,
        backups: bool = True,
    ) -> None:
        self.path = Path(path)
        self.clock = clock
        self.backups = backups
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> TaskCollection:
        """Load tasks from the JSON file.

        A missing or blank file is an empty collection. Anything else that
        does not parse is reported, never replaced.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("Tasks file %s does not exist, returning empty collection", self.path)
            return TaskCollection()
        except UnicodeDecodeError as e:
            logger.error("Tasks file %s is not valid UTF-8", self.path, exc_info=True)
            raise CorruptDataError(self.path, "not valid UTF-8") from e
        except OSError as e:
            logger.error("IO error while loading tasks from %s", self.path, exc_info=True)
            raise StorageIOError(self.path, e.strerror or str(e)) from e

        if not text.strip():
            logger.info("Tasks file %s is empty, returning empty collection", self.path)
            return TaskCollection()

        try:
            collection = TaskCollection.from_json(text)
        except ValueError as e:
            # pydantic.ValidationError is a ValueError
            logger.error("Failed to parse tasks file %s", self.path, exc_info=True)
            raise CorruptDataError(self.path, _first_line(e)) from e

        logger.info("Loaded %d tasks from %s", len(collection), self.path)
        return collection

    def save(self, collection: TaskCollection) -> bool:
        """Write the collection, backing up the previous file first.

        Returns:
            True if the new file is in place, False on any failure
        """
        if self.backups and not self.backup():
            logger.warning("Proceeding with save without a backup of %s", self.path)

        temp_path: Path | None = None
        try:
            payload = collection.to_json()
            fd, name = tempfile.mkstemp(
                dir=self.path.parent, prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX
            )
            temp_path = Path(name)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.write("\n")
                f.flush()
                os.fsync(f.fileno())

            # Replaces any existing file in one step
            os.replace(temp_path, self.path)
            temp_path = None
        except (OSError, ValueError):
            logger.error("Failed to save tasks to %s", self.path, exc_info=True)
            return False
        finally:
            if temp_path is not None:
                _discard(temp_path)

        logger.info("Saved %d tasks to %s", len(collection), self.path)
        return True

    def backup(self) -> bool:
        """Copy the current tasks file to a timestamped sibling.

        Returns:
            True if a backup was written or there was nothing to back up
        """
        if not self.path.exists():
            logger.debug("No tasks file at %s to back up", self.path)
            return True

        target = backup_path_for(self.path, self.clock())
        try:
            shutil.copy2(self.path, target)
        except OSError:
            logger.warning("Failed to back up %s to %s", self.path, target, exc_info=True)
            return False

        logger.info("Created backup at %s", target)
        return True


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError:
        logger.warning("Could not remove temporary file %s", path, exc_info=True)


def _first_line(error: Exception) -> str:
    text = str(error).strip()
    return text.splitlines()[0] if text else type(error).__name__
