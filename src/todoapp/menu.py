"""Interactive prompts for todoapp.

The prompt layer only checks input shape (numbers, date format). Business
rules are enforced again by the repository.
"""

from __future__ import annotations

from datetime import date, datetime

import click

from todoapp.display import MENU_OPTIONS

DATE_INPUT_FORMAT = "%Y-%m-%d"


class MenuPrompter:
    """Reads menu choices and task details from the terminal."""

    def get_menu_selection(self) -> int:
        keys = [key for key, _ in MENU_OPTIONS]
        return click.prompt(
            "Choose an option",
            type=click.IntRange(min(keys), max(keys)),
        )

    def get_task_description(self) -> str:
        return click.prompt("Task description", default="", show_default=False)

    def get_due_date(self) -> date | None:
        """Prompt for an optional due date, re-asking on bad input."""
        while True:
            raw = click.prompt(
                "Due date (YYYY-MM-DD, blank for none)",
                default="",
                show_default=False,
            ).strip()
            if not raw:
                return None
            try:
                return datetime.strptime(raw, DATE_INPUT_FORMAT).date()
            except ValueError:
                click.echo(f"Invalid date: {raw}. Use YYYY-MM-DD.")

    def get_task_id(self) -> int:
        return click.prompt("Task ID", type=click.IntRange(min=1))

    def get_search_text(self) -> str:
        return click.prompt("Search for", default="", show_default=False)

    def get_confirmation(self, message: str) -> bool:
        return click.confirm(message, default=False)
