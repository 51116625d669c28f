"""Pure calendar grid logic - no I/O dependencies."""

import calendar
from datetime import date, datetime, timedelta

from babel import Locale, UnknownLocaleError

MONDAY = 0
SUNDAY = 6

GRID_WEEKS = 6
GRID_SIZE = GRID_WEEKS * 7

WEEKDAY_NAMES = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def is_same_day(a: date, b: date) -> bool:
    """Calendar-day equality, ignoring time of day."""
    return _as_date(a) == _as_date(b)


def parse_weekday(value: str) -> int:
    """Parse an English weekday name ('sunday', 'Mon') to 0=Monday..6=Sunday."""
    wanted = value.strip().lower()
    for index, name in enumerate(WEEKDAY_NAMES):
        if len(wanted) >= 3 and name.startswith(wanted):
            return index
    raise ValueError(f"Unknown weekday: {value}")


def _load_locale(locale: str) -> Locale:
    try:
        return Locale.parse(locale)
    except (UnknownLocaleError, ValueError) as e:
        raise ValueError(f"Unknown locale '{locale}': {e}") from e


def first_weekday(locale: str = "en_US") -> int:
    """First day of the week for a locale (0=Monday..6=Sunday)."""
    return _load_locale(locale).first_week_day


def weekday_header_labels(
    locale: str = "en_US",
    width: str = "abbreviated",
    week_start: int | None = None,
) -> list[str]:
    """
    Seven capitalized weekday labels for the header of a month grid.

    Starts at the locale's first day of week unless `week_start` overrides
    it. `width` is a Babel day-name width: "abbreviated" ("Sun") or
    "narrow" ("S").
    """
    loc = _load_locale(locale)
    start = loc.first_week_day if week_start is None else week_start
    names = loc.days["format"][width]
    return [names[(start + i) % 7].capitalize() for i in range(7)]


def month_grid_days(reference: date, first_weekday: int = SUNDAY) -> list[date]:
    """
    Dates for a fixed 6x7 month grid around `reference`'s month.

    Leading cells are the previous month's trailing days so the 1st lands
    under its weekday; trailing cells are the next month's leading days.
    Always 42 entries, so the grid height never changes between months.
    Weeks start on Sunday, matching the default en_US header labels, unless
    `first_weekday` says otherwise. Callers compare each date's month with
    the reference month to tell in-month cells from padding.

    Pure function - no I/O.
    """
    ref = _as_date(reference)
    weeks = calendar.Calendar(firstweekday=first_weekday).monthdatescalendar(ref.year, ref.month)
    days = [d for week in weeks for d in week]
    while len(days) < GRID_SIZE:
        days.append(days[-1] + timedelta(days=1))
    return days


def shift_month(reference: date, months: int) -> date:
    """Move by whole months, clamping the day to the target month's length."""
    ref = _as_date(reference)
    index = ref.year * 12 + (ref.month - 1) + months
    year, month = divmod(index, 12)
    month += 1
    day = min(ref.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def in_month(day: date, reference: date) -> bool:
    """Whether `day` belongs to the same month (and year) as `reference`."""
    return day.year == reference.year and day.month == reference.month
