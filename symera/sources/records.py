"""Conversion of API records (camelCase JSON objects) into calendar items."""

import logging
from datetime import date, datetime, time, tzinfo
from typing import Any, Iterable, Optional

from dateutil import parser, tz

from symera.sources.base import EventItem, TaskItem, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any, local_tz: Optional[tzinfo] = None):
    """Parse an ISO-8601 date or timestamp.

    Returns a date for date-only values ("2025-06-15") and a naive local
    datetime otherwise. Aware timestamps are converted to local_tz (the
    machine's zone when not given) before the offset is dropped, so the
    calendar day is always the local one.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value
    else:
        text = str(value).strip()
        parsed = parser.isoparse(text)
        if len(text) <= 10:
            return parsed.date()

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(local_tz or tz.tzlocal()).replace(tzinfo=None)
    return parsed


def _parse_clock(value: Any) -> Optional[time]:
    """Parse an "HH:MM" or "HH:MM:SS" time of day."""
    if not value:
        return None
    if isinstance(value, time):
        return value
    return time.fromisoformat(str(value).strip())


def _optional_clock(record: dict, key: str) -> Optional[time]:
    """Parse an optional time-of-day field; a bad value is dropped with a warning."""
    try:
        return _parse_clock(record.get(key))
    except ValueError:
        logger.warning("Ignoring invalid %s %r on event %r", key, record.get(key), record.get("id"))
        return None


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    return value


def parse_event(record: dict, local_tz: Optional[tzinfo] = None) -> EventItem:
    """Build an EventItem from an /api/events record.

    Raises:
        KeyError / ValueError: if the record has no id, no name, or no
        usable start date.
    """
    start_raw = record.get("startDate") or record.get("date")
    start = parse_timestamp(start_raw, local_tz)
    if start is None:
        raise ValueError("event has no startDate")
    end = parse_timestamp(record.get("endDate"), local_tz)

    start_time = _optional_clock(record, "startTime")
    if start_time is None and isinstance(start, datetime) and start.time() != time.min:
        start_time = start.time()

    return EventItem(
        id=int(record["id"]),
        name=str(record["name"]),
        type=record.get("type") or "other",
        start_date=_as_date(start),
        end_date=_as_date(end),
        start_time=start_time,
        end_time=_optional_clock(record, "endTime"),
        location=record.get("location") or "",
    )


def _optional_int(value) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


def _parse_enum(enum_cls, value, default, what: str):
    if value is None:
        return default
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        logger.warning("Unknown task %s %r, using %s", what, value, default.value)
        return default


def parse_task(record: dict, local_tz: Optional[tzinfo] = None) -> TaskItem:
    """Build a TaskItem from an /api/tasks record.

    Raises:
        KeyError / ValueError: if the record has no id or title, or an
        unparseable dueDate.
    """
    return TaskItem(
        id=int(record["id"]),
        title=str(record["title"]),
        due_date=parse_timestamp(record.get("dueDate"), local_tz),
        status=_parse_enum(TaskStatus, record.get("status"), TaskStatus.TODO, "status"),
        priority=_parse_enum(TaskPriority, record.get("priority"), TaskPriority.MEDIUM, "priority"),
        description=record.get("description") or "",
        event_id=_optional_int(record.get("eventId")),
    )


def parse_events(records: Optional[Iterable[dict]], local_tz: Optional[tzinfo] = None) -> list[EventItem]:
    """Parse event records, skipping (and logging) malformed ones."""
    events = []
    for record in records or []:
        if not isinstance(record, dict):
            logger.warning("Skipping malformed event record %r: not an object", record)
            continue
        try:
            events.append(parse_event(record, local_tz))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed event record %r: %s", record.get("id"), e)
    logger.debug("Parsed %d events", len(events))
    return events


def parse_tasks(records: Optional[Iterable[dict]], local_tz: Optional[tzinfo] = None) -> list[TaskItem]:
    """Parse task records, skipping (and logging) malformed ones."""
    tasks = []
    for record in records or []:
        if not isinstance(record, dict):
            logger.warning("Skipping malformed task record %r: not an object", record)
            continue
        try:
            tasks.append(parse_task(record, local_tz))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed task record %r: %s", record.get("id"), e)
    logger.debug("Parsed %d tasks", len(tasks))
    return tasks
