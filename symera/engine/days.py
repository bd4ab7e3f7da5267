"""Calendar-day keys and inclusive day-range expansion."""

from datetime import date, datetime, timedelta
from typing import NamedTuple, Union

DateLike = Union[date, datetime]


class DayKey(NamedTuple):
    """Identity of a local calendar day, ignoring time-of-day."""
    year: int
    month: int
    day: int

    @classmethod
    def of(cls, value: DateLike) -> "DayKey":
        return cls(value.year, value.month, value.day)

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def as_day(value: DateLike) -> date:
    """Drop the time-of-day part of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def expand_range(start: DateLike, end: DateLike) -> list[DayKey]:
    """Return one DayKey per calendar day in [start, end], inclusive.

    Both bounds are reduced to their calendar day first, so an event that
    starts at 18:00 and ends at 09:00 two days later still covers three days.
    The caller guarantees end >= start; an inverted range yields just the
    start day.
    """
    current = as_day(start)
    last = as_day(end)

    keys = [DayKey.of(current)]
    while current < last:
        current += timedelta(days=1)
        keys.append(DayKey.of(current))
    return keys
