"""Day-bucket index over event and task collections."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from symera.engine.days import DateLike, DayKey, expand_range
from symera.sources.base import EventItem, TaskItem

logger = logging.getLogger(__name__)


@dataclass
class Bucket:
    """Events and tasks that fall on one calendar day, in input order."""
    events: list[EventItem] = field(default_factory=list)
    tasks: list[TaskItem] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.events) + len(self.tasks)


DateBucketIndex = dict[DayKey, Bucket]


def build_index(
    events: Optional[Iterable[EventItem]],
    tasks: Optional[Iterable[TaskItem]],
) -> DateBucketIndex:
    """Build a fresh DayKey -> Bucket mapping.

    Each event is placed in every day of its inclusive start..end range; an
    end before the start is clamped to the start. Each task with a due date
    is placed on that day only, and tasks without one are left out. Missing
    collections count as empty.
    """
    index: DateBucketIndex = {}

    for event in events or ():
        start = event.start_date
        end = event.end_date or start
        if end < start:
            logger.debug("Event %s ends before it starts (%s < %s), clamping", event.id, end, start)
            end = start
        for key in expand_range(start, end):
            index.setdefault(key, Bucket()).events.append(event)

    for task in tasks or ():
        if task.due_date is None:
            continue
        index.setdefault(DayKey.of(task.due_date), Bucket()).tasks.append(task)

    logger.debug("Built calendar index with %d populated days", len(index))
    return index


def lookup(index: DateBucketIndex, day: DateLike) -> Bucket:
    """Return the bucket for a day, or an empty one if nothing falls on it."""
    bucket = index.get(DayKey.of(day))
    if bucket is None:
        return Bucket()
    return bucket
