"""Source of "today" for the calendar views."""

import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, tzinfo
from typing import Optional, Union

from dateutil import tz

logger = logging.getLogger(__name__)


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Look up a zone name, falling back to local time (with a warning) if unknown."""
    if not name:
        return tz.tzlocal()
    zone = tz.gettz(name)
    if zone is None:
        logger.warning("Unknown timezone %r, using local time", name)
        return tz.tzlocal()
    return zone


class Clock(ABC):

    @abstractmethod
    def today(self) -> date:
        ...


class SystemClock(Clock):
    """Reads the wall clock in the given timezone (local time if None)."""

    def __init__(self, timezone: Optional[Union[str, tzinfo]] = None):
        if isinstance(timezone, tzinfo):
            self.tz = timezone
        else:
            self.tz = resolve_timezone(timezone)

    def today(self) -> date:
        return datetime.now(self.tz).date()


class FixedClock(Clock):
    """Always returns the same day."""

    def __init__(self, day: date):
        self.day = day

    def today(self) -> date:
        return self.day
