"""Pure task domain logic - no I/O dependencies."""

import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from .calendar import is_same_day


def new_id() -> str:
    """Generate a fresh, never-reused identity."""
    return str(uuid.uuid4())


class TaskFilter(Enum):
    """Completion status filter for the task list."""

    ALL = "All"
    PENDING = "Pending"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, value: "str | TaskFilter") -> "TaskFilter":
        """Parse a filter from its display value, case-insensitively."""
        if isinstance(value, cls):
            return value
        wanted = value.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown filter '{value}' (expected one of: {choices})")

    def matches(self, task: "Task") -> bool:
        if self is TaskFilter.PENDING:
            return not task.is_completed
        if self is TaskFilter.COMPLETED:
            return task.is_completed
        return True


@dataclass
class Task:
    """A to-do item. Only the store creates these."""

    name: str
    due_date: date
    category: str
    is_completed: bool = False
    details: str | None = None
    id: str = field(default_factory=new_id)

    def is_due_on(self, day: date) -> bool:
        return is_same_day(self.due_date, day)

    def is_pending_on(self, day: date) -> bool:
        """Not completed and due on the given calendar day."""
        return not self.is_completed and self.is_due_on(day)


@dataclass
class Category:
    """A named task category. Names are not required to be unique."""

    name: str
    id: str = field(default_factory=new_id)


def filter_by_status(tasks: list[Task], task_filter: TaskFilter) -> list[Task]:
    """
    Keep tasks matching the completion filter, preserving order.

    Pure function - no I/O.
    """
    return [t for t in tasks if task_filter.matches(t)]


def filter_by_category(tasks: list[Task], category: str | None) -> list[Task]:
    """Keep tasks in the named category; None keeps everything."""
    if category is None:
        return list(tasks)
    return [t for t in tasks if t.category == category]


def filter_pending_on(tasks: list[Task], day: date) -> list[Task]:
    """
    Keep tasks that are not completed and due on `day` (any time of day).

    Pure function - no I/O.
    """
    return [t for t in tasks if t.is_pending_on(day)]
