"""In-memory task store with derived views - no I/O dependencies."""

import logging
from collections.abc import Callable, Iterable
from datetime import date
from enum import Enum

from todolist.ports.listener import StoreListener

from .tasks import (
    Category,
    Task,
    TaskFilter,
    filter_by_category,
    filter_by_status,
    filter_pending_on,
)

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = ("Work", "Personal")

# Distinguishes "leave details alone" from "clear details" in update_task.
_UNSET = object()


class NotFoundError(LookupError):
    """An id or list position did not resolve to anything in the store."""


class TaskNotFoundError(NotFoundError):
    def __init__(self, key: str | int):
        self.key = key
        if isinstance(key, int):
            super().__init__(f"No task at row {key}")
        else:
            super().__init__(f"Task {key} not found")


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: str):
        self.key = category_id
        super().__init__(f"Category {category_id} not found")


class StoreEvent(Enum):
    """What changed. Passed to listeners after each successful mutation."""

    TASK_ADDED = "task_added"
    CATEGORY_ADDED = "category_added"
    TASK_TOGGLED = "task_toggled"
    TASK_UPDATED = "task_updated"
    TASKS_DELETED = "tasks_deleted"
    FILTER_CHANGED = "filter_changed"
    CATEGORY_SELECTED = "category_selected"


class TaskStore:
    """
    Owns tasks, categories and the list selection.

    Tasks and categories keep insertion order. Every mutation notifies
    listeners synchronously, so reads made right after a call always see
    the new state. Not thread-safe: callers on several threads must
    serialize access themselves.

    Lookups by an unknown id or an out-of-range row raise a NotFoundError
    subclass; the store never silently ignores bad identity, and failed
    calls do not notify.
    """

    def __init__(self, categories: Iterable[str] | None = None):
        names = DEFAULT_CATEGORIES if categories is None else categories
        self._tasks: list[Task] = []
        self._categories: list[Category] = [Category(name=n) for n in names]
        self._selected_filter = TaskFilter.ALL
        self._selected_category: str | None = None
        self._listeners: list[StoreListener] = []

    # Read accessors

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def categories(self) -> list[Category]:
        return list(self._categories)

    @property
    def selected_filter(self) -> TaskFilter:
        return self._selected_filter

    @property
    def selected_category(self) -> str | None:
        return self._selected_category

    def get_task(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        logger.warning(f"Task lookup failed: {task_id}")
        raise TaskNotFoundError(task_id)

    def get_category(self, category_id: str) -> Category:
        for category in self._categories:
            if category.id == category_id:
                return category
        logger.warning(f"Category lookup failed: {category_id}")
        raise CategoryNotFoundError(category_id)

    # Notification

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a listener. Returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: StoreEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # Mutations

    def add_task(
        self,
        name: str,
        due_date: date,
        category: str,
        details: str | None = None,
    ) -> str:
        """Append a new, not-completed task and return its id."""
        task = Task(name=name, due_date=due_date, category=category, details=details)
        self._tasks.append(task)
        logger.debug(f"Added task {task.id} ({name!r}, due {due_date}, {category})")
        self._notify(StoreEvent.TASK_ADDED)
        return task.id

    def add_category(self, name: str) -> str:
        """Append a category and return its id. Duplicate names are allowed."""
        category = Category(name=name)
        self._categories.append(category)
        logger.debug(f"Added category {category.id} ({name!r})")
        self._notify(StoreEvent.CATEGORY_ADDED)
        return category.id

    def toggle_completion(self, task_id: str) -> None:
        task = self.get_task(task_id)
        task.is_completed = not task.is_completed
        logger.debug(f"Task {task_id} completed={task.is_completed}")
        self._notify(StoreEvent.TASK_TOGGLED)

    def update_task(
        self,
        task_id: str,
        name: str | None = None,
        due_date: date | None = None,
        details: str | None | object = _UNSET,
    ) -> None:
        """
        Apply the given field changes; omitted fields are left unchanged.

        Passing details=None clears the note.
        """
        task = self.get_task(task_id)
        if name is not None:
            task.name = name
        if due_date is not None:
            task.due_date = due_date
        if details is not _UNSET:
            task.details = details
        logger.debug(f"Updated task {task_id}")
        self._notify(StoreEvent.TASK_UPDATED)

    def delete_tasks(self, task_ids: Iterable[str]) -> None:
        """
        Remove the tasks with these ids.

        Every id is checked first; if any is unknown nothing is removed.
        """
        doomed = {self.get_task(task_id).id for task_id in task_ids}
        if not doomed:
            return
        self._tasks = [t for t in self._tasks if t.id not in doomed]
        logger.debug(f"Deleted {len(doomed)} task(s)")
        self._notify(StoreEvent.TASKS_DELETED)

    def delete_filtered(self, positions: Iterable[int]) -> None:
        """
        Remove tasks by their position in `filtered_tasks()`.

        Positions are resolved to ids against the current filtered view
        before anything is removed, so row 0 of a filtered list deletes that
        row's task and not whatever sits first in the full collection.
        """
        view = self.filtered_tasks()
        task_ids = [self._task_in(view, position).id for position in positions]
        self.delete_tasks(task_ids)

    def set_filter(self, task_filter: TaskFilter | str) -> None:
        self._selected_filter = TaskFilter.parse(task_filter)
        logger.debug(f"Filter set to {self._selected_filter.value}")
        self._notify(StoreEvent.FILTER_CHANGED)

    def set_selected_category(self, category: str | None = None) -> None:
        self._selected_category = category
        logger.debug(f"Selected category set to {category!r}")
        self._notify(StoreEvent.CATEGORY_SELECTED)

    # Derived views

    def filtered_tasks(self) -> list[Task]:
        """
        Tasks matching the selected status filter, then the selected category.

        Preserves insertion order and never modifies the store.
        """
        by_status = filter_by_status(self._tasks, self._selected_filter)
        return filter_by_category(by_status, self._selected_category)

    def task_at(self, position: int) -> Task:
        """The task at a 0-based position of the filtered view."""
        return self._task_in(self.filtered_tasks(), position)

    def pending_tasks_on(self, day: date) -> list[Task]:
        """
        Not-completed tasks due on `day`'s calendar day.

        Ignores the selected filter and category.
        """
        return filter_pending_on(self._tasks, day)

    def _task_in(self, view: list[Task], position: int) -> Task:
        if not 0 <= position < len(view):
            logger.warning(f"Row {position} out of range (view has {len(view)} tasks)")
            raise TaskNotFoundError(position)
        return view[position]
