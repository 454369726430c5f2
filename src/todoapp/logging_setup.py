"""Logging configuration for todoapp."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FILE_NAME = "todoapp.log"


class _ConsoleNoiseFilter(logging.Filter):
    """Keep third-party chatter off the interactive console.

    todoapp records pass at the handler level; anything else only at ERROR+.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "todoapp" or record.name.startswith("todoapp."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path,
    console_level: int | str = logging.WARNING,
    file_level: int | str = logging.INFO,
    logger: logging.Logger | None = None,
) -> Path:
    """Configure logging, on the root logger unless ``logger`` is given.

    Console records go to stderr through rich so they do not interleave with
    the menu on stdout. The log file gets everything at ``file_level``.

    Returns:
        Path of the log file
    """
    log_dir = Path(log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logger if logger is not None else logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Avoid duplicate handlers when called more than once
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    console_handler.setLevel(console_level)
    console_handler.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console_handler)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
