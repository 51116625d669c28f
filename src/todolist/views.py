"""Display structures built from the store and the calendar grid.

Nothing here mutates the store; these functions only read its derived
views and format them for the terminal.
"""

from dataclasses import dataclass
from datetime import date

from babel.dates import format_date

from .core.calendar import SUNDAY, in_month, is_same_day, month_grid_days, weekday_header_labels
from .core.store import TaskStore
from .core.tasks import Task

CELL_WIDTH = 5


@dataclass
class DayCell:
    """One cell of the month grid, with what the renderer needs to draw it."""

    date: date
    in_month: bool
    is_today: bool
    has_pending: bool

    def label(self) -> str:
        if not self.in_month:
            return ""
        day = str(self.date.day)
        if self.is_today:
            day = f"[{day}]"
        if self.has_pending:
            day += "•"
        return day


def build_month_cells(
    store: TaskStore,
    reference: date,
    today: date | None = None,
    first_weekday: int = SUNDAY,
) -> list[DayCell]:
    """
    Compute the 42 cells for `reference`'s month.

    Pending dots come from `store.pending_tasks_on`, which ignores the list
    filter, so the calendar shows every open task.
    """
    today = today or date.today()
    return [
        DayCell(
            date=day,
            in_month=in_month(day, reference),
            is_today=is_same_day(day, today),
            has_pending=in_month(day, reference) and bool(store.pending_tasks_on(day)),
        )
        for day in month_grid_days(reference, first_weekday)
    ]


def render_month(
    cells: list[DayCell],
    reference: date,
    locale: str = "en_US",
    first_weekday: int = SUNDAY,
) -> str:
    """Render month cells as a fixed-height text grid with a title and header."""
    labels = weekday_header_labels(locale, week_start=first_weekday)
    width = CELL_WIDTH * 7
    lines = [format_date(reference, "LLLL y", locale=locale).center(width).rstrip()]
    lines.append("".join(label.rjust(CELL_WIDTH) for label in labels))
    for row in range(0, len(cells), 7):
        week = cells[row : row + 7]
        lines.append("".join(cell.label().rjust(CELL_WIDTH) for cell in week).rstrip())
    return "\n".join(lines)


def format_task_line(task: Task, row: int | None = None) -> str:
    """
    Format a single task for the task list.

    Completed tasks are marked [x], pending ones [ ].
    """
    mark = "x" if task.is_completed else " "
    prefix = f"{row:>3}. " if row is not None else ""
    line = f"{prefix}[{mark}] {task.name} (due {task.due_date.strftime('%Y-%m-%d')}, {task.category})"
    if task.details:
        # Keep notes to one line in the list
        note = task.details.splitlines()[0]
        line += f" - {note}"
    return line


def render_task_list(store: TaskStore) -> str:
    """Header plus 1-based rows of the filtered task list."""
    category = store.selected_category or "All Categories"
    header = f"{category} | Filter: {store.selected_filter.value}"
    tasks = store.filtered_tasks()
    if not tasks:
        return f"{header}\nNo tasks."
    rows = [format_task_line(t, i) for i, t in enumerate(tasks, start=1)]
    return "\n".join([header, *rows])


def render_day(store: TaskStore, day: date, locale: str = "en_US") -> str:
    """Pending tasks due on a day, as listed when a calendar dot is picked."""
    tasks = store.pending_tasks_on(day)
    title = f"Tasks for {format_date(day, 'EEEE, MMMM d', locale=locale)}"
    if not tasks:
        return f"{title}\nNo pending tasks."
    return "\n".join([title, *(f"- {t.name}" for t in tasks)])


def render_categories(store: TaskStore) -> str:
    selected = store.selected_category
    lines = [f"{'*' if selected is None else ' '} All Categories"]
    for category in store.categories:
        lines.append(f"{'*' if category.name == selected else ' '} {category.name}")
    return "\n".join(lines)
