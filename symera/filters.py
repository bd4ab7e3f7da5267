"""Filtering and ordering of the checklist and event lists."""

from datetime import date, datetime, time
from typing import Iterable, Optional, Union

from symera.engine.days import as_day
from symera.sources.base import EventItem, TaskItem, TaskPriority, TaskStatus

ALL = "all"

EVENT_SORT_KEYS = ("date", "name", "progress")


def _facet(value, enum_cls):
    if value is None or value == ALL:
        return None
    return enum_cls(value)


def filter_tasks(
    tasks: Iterable[TaskItem],
    status: Optional[Union[TaskStatus, str]] = None,
    priority: Optional[Union[TaskPriority, str]] = None,
    search: str = "",
) -> list[TaskItem]:
    """Filter tasks by status, priority and a case-insensitive search term.

    None or "all" disables a facet. The search term is matched against the
    title and the description.
    """
    wanted_status = _facet(status, TaskStatus)
    wanted_priority = _facet(priority, TaskPriority)
    term = (search or "").strip().lower()

    result = []
    for task in tasks:
        if wanted_status is not None and task.status is not wanted_status:
            continue
        if wanted_priority is not None and task.priority is not wanted_priority:
            continue
        if term and term not in task.title.lower() and term not in task.description.lower():
            continue
        result.append(task)
    return result


def _due_sort_key(task: TaskItem):
    if task.due_date is None:
        return (1, datetime.max)
    due = task.due_date
    if not isinstance(due, datetime):
        due = datetime.combine(due, datetime.min.time())
    return (0, due)


def sort_by_due_date(tasks: Iterable[TaskItem]) -> list[TaskItem]:
    """Tasks with a due date first, earliest first; undated tasks last."""
    return sorted(tasks, key=_due_sort_key)


def tasks_due_between(tasks: Iterable[TaskItem], start: date, end: date) -> list[TaskItem]:
    """Tasks whose due day lies in [start, end], in input order."""
    first, last = as_day(start), as_day(end)
    return [t for t in tasks if t.due_date is not None and first <= as_day(t.due_date) <= last]


def filter_events(
    events: Iterable[EventItem],
    event_type: Optional[str] = None,
    search: str = "",
) -> list[EventItem]:
    """Filter events by type and a case-insensitive search over name and location.

    None or "all" disables the type filter.
    """
    term = (search or "").strip().lower()
    wanted_type = None if event_type in (None, ALL) else event_type

    result = []
    for event in events:
        if wanted_type is not None and event.type != wanted_type:
            continue
        if term and term not in event.name.lower() and term not in event.location.lower():
            continue
        result.append(event)
    return result


def event_progress(event: EventItem, tasks: Iterable[TaskItem]) -> float:
    """Percentage of the event's tasks that are completed; 0 when it has none."""
    own = [t for t in tasks if t.event_id == event.id]
    if not own:
        return 0.0
    return 100.0 * sum(1 for t in own if t.is_completed) / len(own)


def sort_events(
    events: Iterable[EventItem],
    by: str = "date",
    tasks: Optional[Iterable[TaskItem]] = None,
) -> list[EventItem]:
    """Order events by start date, by name, or by progress (highest first).

    Progress is computed from tasks, matched to events by event_id.
    """
    if by == "date":
        return sorted(events, key=lambda e: (e.start_date, e.start_time or time.min))
    if by == "name":
        return sorted(events, key=lambda e: e.name.casefold())
    if by == "progress":
        task_list = list(tasks or ())
        return sorted(events, key=lambda e: event_progress(e, task_list), reverse=True)
    raise ValueError(f"unknown event sort key {by!r}, expected one of {EVENT_SORT_KEYS}")
