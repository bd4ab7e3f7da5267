"""Per-day cell summaries: inline items, overflow, indicators and colors."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional

from symera.engine.days import DateLike, as_day
from symera.engine.index import Bucket
from symera.engine.window import ViewMode
from symera.sources.base import (
    CalendarItem,
    EventItem,
    TaskItem,
    TaskPriority,
    TaskStatus,
)

# How many items a cell lists inline before "+N more"; None is unlimited.
DEFAULT_MAX_VISIBLE = {
    ViewMode.MONTH: 2,
    ViewMode.WEEK: 3,
    ViewMode.DAY: None,
}


class ItemColor(str, Enum):
    PRIMARY = "primary"  # events
    GREEN = "green"
    RED = "red"
    AMBER = "amber"
    BLUE = "blue"


@dataclass(frozen=True)
class IndicatorFlags:
    has_event: bool = False
    has_pending_task: bool = False
    has_completed_task: bool = False


@dataclass
class CellSummary:
    day: date
    events: list[EventItem]
    tasks: list[TaskItem]
    visible_items: list[CalendarItem]
    overflow_count: int
    indicators: IndicatorFlags
    is_selected: bool = False
    is_today: bool = False

    @property
    def total_items(self) -> int:
        return len(self.events) + len(self.tasks)


def default_max_visible(view_mode: ViewMode) -> Optional[int]:
    return DEFAULT_MAX_VISIBLE[view_mode]


def task_color(status: TaskStatus, priority: TaskPriority) -> ItemColor:
    """Color for a task; the same for every view."""
    if status is TaskStatus.COMPLETED:
        return ItemColor.GREEN
    if priority is TaskPriority.HIGH:
        return ItemColor.RED
    if status is TaskStatus.IN_PROGRESS:
        return ItemColor.AMBER
    return ItemColor.BLUE


def item_color(item: CalendarItem) -> ItemColor:
    if item.is_event:
        return ItemColor.PRIMARY
    return task_color(item.item.status, item.item.priority)


def summarize(
    day: DateLike,
    bucket: Bucket,
    selected_date: Optional[DateLike],
    max_visible: Optional[int],
    today: Optional[DateLike] = None,
) -> CellSummary:
    """Summarize one day cell.

    Events are listed before tasks and at most max_visible items are kept
    inline; the rest are reported as overflow_count.
    """
    day = as_day(day)
    items = [CalendarItem.event(e) for e in bucket.events]
    items.extend(CalendarItem.task(t) for t in bucket.tasks)

    if max_visible is None:
        visible = items
    else:
        visible = items[:max(max_visible, 0)]

    indicators = IndicatorFlags(
        has_event=len(bucket.events) > 0,
        has_pending_task=any(not t.is_completed for t in bucket.tasks),
        has_completed_task=any(t.is_completed for t in bucket.tasks),
    )

    return CellSummary(
        day=day,
        events=list(bucket.events),
        tasks=list(bucket.tasks),
        visible_items=visible,
        overflow_count=len(items) - len(visible),
        indicators=indicators,
        is_selected=selected_date is not None and as_day(selected_date) == day,
        is_today=today is not None and as_day(today) == day,
    )


@dataclass
class DaySchedule:
    """A day's items split into all-day entries and hourly slots."""
    all_day: list[CalendarItem] = field(default_factory=list)
    by_hour: dict[int, list[CalendarItem]] = field(default_factory=dict)


def hour_slots(day: DateLike, bucket: Bucket) -> DaySchedule:
    """Group a day's items by starting hour for the day view.

    Timed events land in their start hour on their first day only; later
    days of a multi-day event show it as all-day. Tasks land in the hour of
    their due time when one was given.
    """
    day = as_day(day)
    schedule = DaySchedule()

    for event in bucket.events:
        item = CalendarItem.event(event)
        if event.start_time is not None and event.start_date == day:
            schedule.by_hour.setdefault(event.start_time.hour, []).append(item)
        else:
            schedule.all_day.append(item)

    for task in bucket.tasks:
        item = CalendarItem.task(task)
        if isinstance(task.due_date, datetime):
            schedule.by_hour.setdefault(task.due_date.hour, []).append(item)
        else:
            schedule.all_day.append(item)

    return schedule
