"""Console rendering for todoapp."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from todoapp.errors import TodoError
from todoapp.models import TaskItem, TaskStatus, TaskSummary

DESCRIPTION_WIDTH = 50

STATUS_STYLES = {
    TaskStatus.PENDING: "[yellow]Pending[/yellow]",
    TaskStatus.OVERDUE: "[bold red]Overdue[/bold red]",
    TaskStatus.COMPLETED: "[green]✓ Completed[/green]",
}

MENU_OPTIONS = [
    (1, "List tasks"),
    (2, "Add task"),
    (3, "Complete task"),
    (4, "Delete task"),
    (5, "Search tasks"),
    (0, "Exit"),
]


class Display:
    """Formats menus, task lists and messages."""

    def __init__(self, console: Console | None = None, date_format: str = "%Y-%m-%d") -> None:
        self.console = console or Console()
        self.date_format = date_format

    def show_main_menu(self) -> None:
        lines = "\n".join(f"  [cyan]{key}[/cyan]. {label}" for key, label in MENU_OPTIONS)
        self.console.print()
        self.console.print(Panel.fit(lines, title="[bold]Todo Manager[/bold]"))

    def show_task_list(
        self,
        tasks: Iterable[TaskItem],
        title: str = "Tasks",
        now: datetime | None = None,
    ) -> None:
        """Show tasks as a table."""
        tasks = list(tasks)
        if not tasks:
            self.console.print("[dim]No tasks found.[/dim]")
            return

        if now is None:
            now = datetime.now()

        table = Table(title=escape(title), show_header=True)
        table.add_column("ID", style="cyan", justify="right")
        table.add_column("Description", style="white")
        table.add_column("Created", style="dim")
        table.add_column("Due", style="white")
        table.add_column("Status", style="white")

        for task in tasks:
            description = task.description[:DESCRIPTION_WIDTH] + (
                "..." if len(task.description) > DESCRIPTION_WIDTH else ""
            )
            table.add_row(
                str(task.id),
                escape(description),
                self._format_date(task.created_date),
                self._format_date(task.due_date) or "[dim]-[/dim]",
                STATUS_STYLES[task.status_at(now)],
            )

        self.console.print(table)

    def show_summary(self, summary: TaskSummary) -> None:
        self.console.print(
            f"[bold]{summary.total}[/bold] total  "
            f"[yellow]{summary.pending} pending[/yellow]  "
            f"[red]{summary.overdue} overdue[/red]  "
            f"[green]{summary.completed} completed[/green]"
        )

    def show_success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def show_warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {escape(message)}")

    def show_error(self, message: str) -> None:
        self.console.print(
            Panel(escape(message), title="[bold red]Error[/bold red]", border_style="red")
        )

    def show_failure(self, error: TodoError) -> None:
        """Show a todo error, as a warning if the user can correct it."""
        if error.correctable:
            self.show_warning(str(error))
        else:
            self.show_error(str(error))

    def _format_date(self, value: datetime | None) -> str:
        return value.strftime(self.date_format) if value is not None else ""
