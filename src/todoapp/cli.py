"""CLI entry point for todoapp."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
import pydantic
from rich.console import Console

from todoapp import __version__
from todoapp.config import CONFIG_FILE, TodoConfig
from todoapp.display import Display
from todoapp.handlers import build_handlers, run_menu
from todoapp.logging_setup import setup_logging
from todoapp.menu import MenuPrompter
from todoapp.repository import TaskRepository
from todoapp.storage import JsonTaskStorage

console = Console()
logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="todo")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Configuration file (default: {CONFIG_FILE})",
)
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Tasks file to use instead of the configured one",
)
@click.option("--verbose", "-v", is_flag=True, help="Show informational logs on the console")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    data_file: Path | None,
    verbose: bool,
) -> None:
    """todo - a terminal task manager.

    \b
    Pick an option from the menu to list, add, complete, delete or
    search tasks. Tasks are saved to a JSON file after every change.
    """
    try:
        config = TodoConfig.load(config_path)
    except (OSError, json.JSONDecodeError, pydantic.ValidationError) as e:
        console.print(f"[red]Could not load configuration:[/red] {e}")
        ctx.exit(1)

    if data_file is not None:
        config.storage.data_file = str(data_file)

    try:
        log_file = setup_logging(
            log_dir=config.logging.log_dir,
            console_level="INFO" if verbose else config.logging.console_level,
            file_level=config.logging.level,
        )
        storage = JsonTaskStorage(config.data_path, backups=config.storage.backups)
    except OSError as e:
        console.print(f"[red]Startup failed:[/red] {e}")
        ctx.exit(1)

    logger.info("todoapp %s started, tasks file %s, log %s", __version__, storage.path, log_file)

    repository = TaskRepository(storage)
    display = Display(console, date_format=config.display.date_format)
    prompter = MenuPrompter()
    handlers = build_handlers(
        repository, prompter, display, show_summary=config.display.show_summary
    )

    console.print(f"[bold]Todo Manager[/bold] [dim]{storage.path}[/dim]")
    try:
        run_menu(handlers, prompter, display)
    except click.Abort:
        # Ctrl-C or end of input at a prompt
        console.print()

    logger.info("todoapp exiting")
    console.print("[dim]Goodbye![/dim]")


if __name__ == "__main__":
    main()
