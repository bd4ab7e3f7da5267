"""Which days a day, week or month view displays."""

import calendar
from datetime import date, timedelta
from enum import Enum

from symera.engine.days import DateLike, as_day

# Python weekday numbers (Monday is 0)
MONDAY = calendar.MONDAY
SUNDAY = calendar.SUNDAY

WEEKDAY_NAMES = {name.lower(): number for number, name in enumerate(calendar.day_name)}


class ViewMode(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


def parse_week_start(value) -> int:
    """Accept a weekday number (0-6, Monday first) or an English day name."""
    if isinstance(value, int):
        if not 0 <= value <= 6:
            raise ValueError(f"week start must be between 0 and 6, got {value}")
        return value
    text = str(value).strip().lower()
    if text.isdigit():
        return parse_week_start(int(text))
    try:
        return WEEKDAY_NAMES[text]
    except KeyError:
        raise ValueError(f"unknown weekday: {value!r}") from None


def start_of_week(day: date, week_start: int = SUNDAY) -> date:
    return day - timedelta(days=(day.weekday() - week_start) % 7)


def compute_window(cursor_date: DateLike, view_mode: ViewMode, week_start: int = SUNDAY) -> list[date]:
    """Return the ordered days a view anchored at cursor_date renders.

    The month view covers whole weeks: from the start of the week holding
    the 1st through the end of the week holding the last day, so leading
    and trailing days of the neighbouring months are included.
    """
    cursor = as_day(cursor_date)

    if view_mode is ViewMode.DAY:
        return [cursor]

    if view_mode is ViewMode.WEEK:
        first = start_of_week(cursor, week_start)
        return [first + timedelta(days=i) for i in range(7)]

    weeks = calendar.Calendar(firstweekday=week_start).monthdatescalendar(cursor.year, cursor.month)
    return [day for week in weeks for day in week]


def window_title(cursor_date: DateLike, view_mode: ViewMode, week_start: int = SUNDAY) -> str:
    """Header label for a view, e.g. "June 2025", "15 - 21 Jun" or "Sun, 15 Jun"."""
    cursor = as_day(cursor_date)

    if view_mode is ViewMode.MONTH:
        return f"{calendar.month_name[cursor.month]} {cursor.year}"

    if view_mode is ViewMode.WEEK:
        first = start_of_week(cursor, week_start)
        last = first + timedelta(days=6)
        if first.month == last.month:
            return f"{first.day} - {last.day} {calendar.month_abbr[first.month]}"
        return (
            f"{first.day} {calendar.month_abbr[first.month]} - "
            f"{last.day} {calendar.month_abbr[last.month]}"
        )

    return f"{calendar.day_abbr[cursor.weekday()]}, {cursor.day} {calendar.month_abbr[cursor.month]}"
