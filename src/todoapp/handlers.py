"""Command handlers for the main menu.

Each handler asks for the input it needs, calls the repository and reports
the outcome. Todo errors are shown to the user and the menu continues.
"""

from __future__ import annotations

import logging
from typing import Protocol

from todoapp.display import Display
from todoapp.errors import TodoError
from todoapp.menu import MenuPrompter
from todoapp.models import TaskSummary
from todoapp.repository import TaskRepository

logger = logging.getLogger(__name__)


class Handler(Protocol):
    def handle(self) -> bool: ...


class BaseHandler:
    """Shared wiring for handlers."""

    def __init__(
        self,
        repository: TaskRepository,
        prompter: MenuPrompter,
        display: Display,
    ) -> None:
        self.repository = repository
        self.prompter = prompter
        self.display = display

    def handle(self) -> bool:
        """Run the command. Returns True if it succeeded."""
        try:
            self.run()
        except TodoError as e:
            logger.info("%s failed: %s", type(self).__name__, e)
            self.display.show_failure(e)
            return False
        return True

    def run(self) -> None:
        raise NotImplementedError


class ListTasksHandler(BaseHandler):
    def __init__(
        self,
        repository: TaskRepository,
        prompter: MenuPrompter,
        display: Display,
        show_summary: bool = True,
    ) -> None:
        super().__init__(repository, prompter, display)
        self.show_summary = show_summary

    def run(self) -> None:
        tasks = self.repository.get_all()
        now = self.repository.clock()
        self.display.show_task_list(tasks, now=now)
        if self.show_summary and len(tasks):
            self.display.show_summary(TaskSummary.from_tasks(tasks, now))


class AddTaskHandler(BaseHandler):
    def run(self) -> None:
        description = self.prompter.get_task_description()
        due_date = self.prompter.get_due_date()
        task = self.repository.add(description, due_date)
        self.display.show_success(f"Added task {task.id}: {task.description}")


class CompleteTaskHandler(BaseHandler):
    def run(self) -> None:
        task_id = self.prompter.get_task_id()
        task = self.repository.complete(task_id)
        self.display.show_success(f"Completed task {task.id}: {task.description}")


class DeleteTaskHandler(BaseHandler):
    """Delete a task after confirmation."""

    def run(self) -> None:
        task_id = self.prompter.get_task_id()
        if not self.prompter.get_confirmation(f"Delete task {task_id}?"):
            self.display.show_warning("Delete cancelled.")
            return
        task = self.repository.delete(task_id)
        self.display.show_success(f"Deleted task {task.id}: {task.description}")


class SearchTasksHandler(BaseHandler):
    def run(self) -> None:
        query = self.prompter.get_search_text()
        matches = self.repository.search(query)
        self.display.show_task_list(
            matches,
            title=f"Tasks matching '{query.strip()}'",
            now=self.repository.clock(),
        )


def build_handlers(
    repository: TaskRepository,
    prompter: MenuPrompter,
    display: Display,
    show_summary: bool = True,
) -> dict[int, Handler]:
    """Map main menu options to their handlers."""
    return {
        1: ListTasksHandler(repository, prompter, display, show_summary=show_summary),
        2: AddTaskHandler(repository, prompter, display),
        3: CompleteTaskHandler(repository, prompter, display),
        4: DeleteTaskHandler(repository, prompter, display),
        5: SearchTasksHandler(repository, prompter, display),
    }


def run_menu(
    handlers: dict[int, Handler],
    prompter: MenuPrompter,
    display: Display,
) -> None:
    """Show the main menu until the user chooses to exit."""
    while True:
        display.show_main_menu()
        choice = prompter.get_menu_selection()
        if choice == 0:
            return
        handler = handlers.get(choice)
        if handler is None:
            display.show_warning(f"Unknown option: {choice}")
            continue
        handler.handle()
