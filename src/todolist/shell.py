"""Interactive session over a single in-memory task store.

Each input line is parsed with shlex and dispatched to a click command in
the `commands` group, so options and validation work the same way as on
the real command line. Rows are the 1-based numbers shown by `list`.
"""

import logging
import shlex
from dataclasses import dataclass, field
from datetime import date

import click

from .config import Config
from .core.calendar import shift_month
from .core.store import StoreEvent, TaskNotFoundError, TaskStore
from .core.tasks import TaskFilter
from .views import build_month_cells, render_categories, render_day, render_month, render_task_list

logger = logging.getLogger(__name__)

DATE = click.DateTime(formats=["%Y-%m-%d"])
MONTH = click.DateTime(formats=["%Y-%m"])

# Mutations after which the task list is redrawn
LIST_EVENTS = {
    StoreEvent.TASK_ADDED,
    StoreEvent.TASK_TOGGLED,
    StoreEvent.TASK_UPDATED,
    StoreEvent.TASKS_DELETED,
    StoreEvent.FILTER_CHANGED,
    StoreEvent.CATEGORY_SELECTED,
}


@dataclass
class Session:
    """State of one interactive session."""

    store: TaskStore
    config: Config
    month: date
    today: date
    list_stale: bool = False
    done: bool = False
    events: list[StoreEvent] = field(default_factory=list)

    def on_change(self, event: StoreEvent) -> None:
        self.events.append(event)
        if event in LIST_EVENTS:
            self.list_stale = True

    def category_names(self) -> list[str]:
        return [c.name for c in self.store.categories]

    def show_month(self) -> None:
        week_start = self.config.first_weekday()
        cells = build_month_cells(self.store, self.month, self.today, week_start)
        click.echo(render_month(cells, self.month, self.config.locale, week_start))


pass_session = click.make_pass_decorator(Session)


@click.group()
def commands():
    """Commands available inside `todo shell`."""
    pass


@commands.command("list")
@pass_session
def list_tasks(session: Session):
    """Show the filtered task list."""
    click.echo(render_task_list(session.store))
    session.list_stale = False


@commands.command()
@click.argument("name")
@click.argument("due", type=DATE)
@click.argument("category")
@click.argument("details", required=False)
@pass_session
def add(session: Session, name: str, due, category: str, details: str | None):
    """Add a task: add NAME YYYY-MM-DD CATEGORY [DETAILS]."""
    if not name.strip():
        raise click.UsageError("Task name cannot be empty")
    if category not in session.category_names():
        raise click.UsageError(f"Unknown category '{category}' (add it with: category NAME)")
    session.store.add_task(name, due.date(), category, details or None)


@commands.command()
@click.argument("name")
@pass_session
def category(session: Session, name: str):
    """Add a category."""
    session.store.add_category(name)
    click.echo(f"Added category {name}")


@commands.command()
@pass_session
def categories(session: Session):
    """List categories; * marks the one being shown."""
    click.echo(render_categories(session.store))


@commands.command()
@click.argument("row", type=click.IntRange(min=1))
@pass_session
def done(session: Session, row: int):
    """Toggle completion of a row."""
    task = session.store.task_at(row - 1)
    session.store.toggle_completion(task.id)


@commands.command()
@click.argument("row", type=click.IntRange(min=1))
@click.option("--name", default=None, help="New task name")
@click.option("--due", type=DATE, default=None, help="New due date (YYYY-MM-DD)")
@click.option("--details", default=None, help="New notes")
@click.option("--clear-details", is_flag=True, help="Remove notes")
@pass_session
def edit(session: Session, row: int, name: str | None, due, details: str | None, clear_details: bool):
    """Modify a task's name, due date or notes."""
    if details is not None and clear_details:
        raise click.UsageError("--details and --clear-details are mutually exclusive")
    if name is not None and not name.strip():
        raise click.UsageError("Task name cannot be empty")
    task = session.store.task_at(row - 1)
    changes = {}
    if name is not None:
        changes["name"] = name
    if due is not None:
        changes["due_date"] = due.date()
    if details is not None:
        changes["details"] = details
    elif clear_details:
        changes["details"] = None
    if not changes:
        raise click.UsageError("Nothing to change")
    session.store.update_task(task.id, **changes)


@commands.command()
@click.argument("rows", nargs=-1, required=True, type=click.IntRange(min=1))
@pass_session
def rm(session: Session, rows: tuple[int, ...]):
    """Delete rows of the current list."""
    session.store.delete_filtered(row - 1 for row in rows)


@commands.command("filter")
@click.argument(
    "status",
    type=click.Choice([f.value for f in TaskFilter], case_sensitive=False),
)
@pass_session
def filter_cmd(session: Session, status: str):
    """Show all, pending or completed tasks."""
    session.store.set_filter(status)


@commands.command()
@click.argument("name")
@pass_session
def show(session: Session, name: str):
    """Show one category's tasks, or 'all'."""
    if name.lower() == "all":
        session.store.set_selected_category(None)
        return
    if name not in session.category_names():
        raise click.UsageError(f"Unknown category '{name}'")
    session.store.set_selected_category(name)


@commands.command()
@click.argument("month", type=MONTH, required=False)
@pass_session
def cal(session: Session, month):
    """Show a month (YYYY-MM), defaulting to the current one."""
    if month is not None:
        session.month = month.date()
    session.show_month()


@commands.command("next")
@pass_session
def next_month(session: Session):
    """Show the following month."""
    session.month = shift_month(session.month, 1)
    session.show_month()


@commands.command("prev")
@pass_session
def prev_month(session: Session):
    """Show the previous month."""
    session.month = shift_month(session.month, -1)
    session.show_month()


@commands.command()
@click.argument("day", type=DATE)
@pass_session
def day(session: Session, day):
    """List pending tasks due on a day."""
    click.echo(render_day(session.store, day.date(), session.config.locale))


@commands.command("help")
def help_cmd():
    """Show commands."""
    for name, cmd in sorted(commands.commands.items()):
        click.echo(f"  {name:11} {cmd.get_short_help_str(limit=60)}")


@commands.command("quit")
@pass_session
def quit_cmd(session: Session):
    """Leave the shell."""
    session.done = True


commands.add_command(quit_cmd, "exit")


class TodoShell:
    """Reads lines, runs them against the session and redraws on change."""

    def __init__(self, config: Config, today: date | None = None):
        today = today or date.today()
        store = TaskStore(config.default_categories)
        self.session = Session(store=store, config=config, month=today, today=today)
        self._unsubscribe = store.subscribe(self.session.on_change)

    @property
    def store(self) -> TaskStore:
        return self.session.store

    def handle(self, line: str) -> bool:
        """Run one input line. Returns False once the session should end."""
        try:
            args = shlex.split(line)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            return True
        if not args:
            return True

        try:
            commands.main(args=args, prog_name="", standalone_mode=False, obj=self.session)
        except TaskNotFoundError as e:
            row = e.key + 1 if isinstance(e.key, int) else e.key
            click.echo(f"Error: No task {row}", err=True)
        except click.ClickException as e:
            click.echo(f"Error: {e.format_message()}", err=True)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)

        if self.session.list_stale:
            click.echo(render_task_list(self.store))
            self.session.list_stale = False
        return not self.session.done

    def run(self) -> None:
        """Prompt until quit or end of input."""
        click.echo("Type 'help' for commands.")
        self.session.show_month()
        click.echo()
        click.echo(render_task_list(self.store))
        try:
            while True:
                try:
                    line = click.prompt("", prompt_suffix="> ", default="", show_default=False)
                except click.Abort:
                    break
                if not self.handle(line):
                    break
        finally:
            self._unsubscribe()
        logger.debug(f"Session ended after {len(self.session.events)} change(s)")
