"""todolist CLI - in-memory to-do list with a month calendar."""

import sys
from datetime import date

import click

from .config import configure_logging, load_config
from .core.calendar import weekday_header_labels
from .core.store import TaskStore
from .shell import TodoShell
from .views import build_month_cells, render_month


@click.group()
@click.version_option(package_name="todolist")
def main():
    """todo - Task list and calendar."""
    pass


@main.command()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def shell(debug: bool):
    """Start an interactive session (tasks live until you quit)."""
    config = load_config()
    configure_logging(config, debug)
    try:
        TodoShell(config).run()
    except ValueError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option("--month", "-m", "month", type=click.DateTime(formats=["%Y-%m"]), default=None,
              help="Month to show (YYYY-MM), defaults to this month")
@click.option("--locale", "-l", "locale", default=None, help="Locale for weekday names, e.g. en_GB")
def calendar(month, locale: str | None):
    """Print a month grid."""
    config = load_config()
    configure_logging(config)
    if locale:
        config.locale = locale

    today = date.today()
    reference = month.date() if month else today
    try:
        week_start = config.first_weekday()
        # Fresh store: nothing is pending outside a shell session
        cells = build_month_cells(TaskStore(config.default_categories), reference, today, week_start)
        click.echo(render_month(cells, reference, config.locale, week_start))
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option("--locale", "-l", "locale", default=None, help="Locale, e.g. de_DE")
@click.option("--narrow", is_flag=True, help="Single-letter labels")
def weekdays(locale: str | None, narrow: bool):
    """Print weekday header labels, starting at the locale's first day."""
    config = load_config()
    if locale:
        config.locale = locale
    try:
        week_start = config.first_weekday()
        labels = weekday_header_labels(config.locale, "narrow" if narrow else "abbreviated", week_start)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(" ".join(labels))


if __name__ == "__main__":
    main()
