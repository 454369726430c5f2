"""Configuration models for todoapp."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

# Default locations, all per-user
TODO_DIR = Path.home() / ".todoapp"
CONFIG_FILE = TODO_DIR / "config.json"
LOG_DIR = TODO_DIR / "logs"
TASKS_FILE = Path.home() / "tasks.json"


class StorageConfig(BaseModel):
    """Configuration for the task file."""

    data_file: str = str(TASKS_FILE)
    backups: bool = True


class LoggingConfig(BaseModel):
    """Configuration for log output."""

    level: LogLevel = "INFO"
    console_level: LogLevel = "WARNING"
    log_dir: str = str(LOG_DIR)


class DisplayConfig(BaseModel):
    """Configuration for task rendering."""

    date_format: str = "%Y-%m-%d"
    show_summary: bool = True


class TodoConfig(BaseModel):
    """Main configuration for todoapp."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @property
    def data_path(self) -> Path:
        return Path(self.storage.data_file).expanduser()

    @classmethod
    def load(cls, path: Path | None = None) -> TodoConfig:
        """Load configuration from file or return defaults."""
        if path is None:
            path = CONFIG_FILE

        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        return cls.model_validate(data)

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        if path is None:
            path = CONFIG_FILE

        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(), f, indent=2)
