from datetime import date

import pytest

from symera.engine.cells import (
    ItemColor,
    default_max_visible,
    hour_slots,
    item_color,
    summarize,
    task_color,
)
from symera.engine.index import Bucket, build_index, lookup
from symera.engine.window import ViewMode
from symera.sources.base import EventItem, ItemKind, TaskItem, TaskPriority, TaskStatus

DAY = date(2025, 6, 15)


def _bucket(n_events, n_tasks):
    return Bucket(
        events=[EventItem(id=i, name=f"E{i}", start_date=DAY) for i in range(n_events)],
        tasks=[TaskItem(id=i, title=f"T{i}", due_date=DAY) for i in range(n_tasks)],
    )


@pytest.mark.parametrize("n_events, n_tasks", [(0, 0), (1, 0), (0, 3), (2, 2), (5, 1)])
@pytest.mark.parametrize("max_visible", [0, 1, 2, 3, 10])
def test_overflow_arithmetic(n_events, n_tasks, max_visible):
    summary = summarize(DAY, _bucket(n_events, n_tasks), None, max_visible)
    total = n_events + n_tasks

    assert summary.overflow_count == max(0, total - max_visible)
    assert len(summary.visible_items) == min(total, max_visible)
    assert summary.total_items == total


def test_unlimited_shows_everything():
    summary = summarize(DAY, _bucket(3, 4), None, None)
    assert len(summary.visible_items) == 7
    assert summary.overflow_count == 0


def test_events_listed_before_tasks():
    summary = summarize(DAY, _bucket(1, 2), None, 2)
    assert [item.kind for item in summary.visible_items] == [ItemKind.EVENT, ItemKind.TASK]
    assert summary.overflow_count == 1


def test_indicator_flags():
    bucket = Bucket(tasks=[
        TaskItem(id=1, title="Done", due_date=DAY, status=TaskStatus.COMPLETED),
        TaskItem(id=2, title="Doing", due_date=DAY, status=TaskStatus.IN_PROGRESS),
    ])
    flags = summarize(DAY, bucket, None, 2).indicators
    assert not flags.has_event
    assert flags.has_pending_task
    assert flags.has_completed_task

    empty = summarize(DAY, Bucket(), None, 2).indicators
    assert not (empty.has_event or empty.has_pending_task or empty.has_completed_task)


@pytest.mark.parametrize("status, priority, expected", [
    (TaskStatus.COMPLETED, TaskPriority.HIGH, ItemColor.GREEN),
    (TaskStatus.COMPLETED, TaskPriority.LOW, ItemColor.GREEN),
    (TaskStatus.TODO, TaskPriority.HIGH, ItemColor.RED),
    (TaskStatus.IN_PROGRESS, TaskPriority.HIGH, ItemColor.RED),
    (TaskStatus.IN_PROGRESS, TaskPriority.MEDIUM, ItemColor.AMBER),
    (TaskStatus.TODO, TaskPriority.MEDIUM, ItemColor.BLUE),
    (TaskStatus.TODO, TaskPriority.LOW, ItemColor.BLUE),
])
def test_task_color(status, priority, expected):
    assert task_color(status, priority) is expected


def test_color_is_the_same_in_every_view():
    task = TaskItem(id=1, title="T", due_date=DAY, status=TaskStatus.IN_PROGRESS)
    colors = set()
    for mode in ViewMode:
        summary = summarize(DAY, Bucket(tasks=[task]), None, default_max_visible(mode))
        colors.add(item_color(summary.visible_items[0]))
    assert colors == {ItemColor.AMBER}


def test_default_max_visible():
    assert default_max_visible(ViewMode.MONTH) == 2
    assert default_max_visible(ViewMode.WEEK) == 3
    assert default_max_visible(ViewMode.DAY) is None


def test_selected_and_today_are_independent():
    summary = summarize(DAY, Bucket(), date(2025, 6, 16), 2, today=DAY)
    assert summary.is_today
    assert not summary.is_selected

    summary = summarize(DAY, Bucket(), DAY, 2, today=date(2025, 6, 16))
    assert summary.is_selected
    assert not summary.is_today


def test_wedding_example_cell(wedding, photographer_task):
    index = build_index([wedding], [photographer_task])
    summary = summarize(DAY, lookup(index, DAY), DAY, 2)

    assert [item.label for item in summary.visible_items] == ["Wedding", "Book photographer"]
    assert summary.overflow_count == 0
    assert item_color(summary.visible_items[0]) is ItemColor.PRIMARY
    assert item_color(summary.visible_items[1]) is ItemColor.RED


def test_hour_slots(wedding, photographer_task):
    reminder = TaskItem(id=2, title="Call venue", due_date=DAY)
    index = build_index([wedding], [photographer_task, reminder])

    first_day = hour_slots(DAY, lookup(index, DAY))
    assert [item.label for item in first_day.by_hour[16]] == ["Wedding"]
    assert [item.label for item in first_day.by_hour[10]] == ["Book photographer"]
    assert [item.label for item in first_day.all_day] == ["Call venue"]

    second_day = hour_slots(date(2025, 6, 16), lookup(index, date(2025, 6, 16)))
    assert second_day.by_hour == {}
    assert [item.label for item in second_day.all_day] == ["Wedding"]


def test_hour_slots_untimed_event_is_all_day():
    event = EventItem(id=1, name="Fair", start_date=DAY)
    schedule = hour_slots(DAY, Bucket(events=[event]))
    assert [item.item for item in schedule.all_day] == [event]
    assert schedule.by_hour == {}
