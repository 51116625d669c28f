"""Functional core - task store and calendar grid, no I/O."""

from .tasks import Task, Category, TaskFilter
from .store import (
    TaskStore,
    StoreEvent,
    NotFoundError,
    TaskNotFoundError,
    CategoryNotFoundError,
)
from .calendar import (
    weekday_header_labels,
    month_grid_days,
    is_same_day,
)

__all__ = [
    # Tasks
    "Task",
    "Category",
    "TaskFilter",
    # Store
    "TaskStore",
    "StoreEvent",
    "NotFoundError",
    "TaskNotFoundError",
    "CategoryNotFoundError",
    # Calendar
    "weekday_header_labels",
    "month_grid_days",
    "is_same_day",
]
