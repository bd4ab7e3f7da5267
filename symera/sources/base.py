"""Calendar item types and the abstract base class for data sources."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from typing import Optional, Union

from symera.engine.days import DateLike


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ItemKind(str, Enum):
    EVENT = "event"
    TASK = "task"


@dataclass(frozen=True)
class EventItem:
    """An event occupying the inclusive day range start_date..end_date."""
    id: int
    name: str
    start_date: date
    type: str = "other"
    end_date: Optional[date] = None  # None means a single-day event
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    location: str = ""

    @property
    def last_date(self) -> date:
        return self.end_date or self.start_date


@dataclass(frozen=True)
class TaskItem:
    """A checklist task, shown on the calendar on the day it is due."""
    id: int
    title: str
    due_date: Optional[DateLike] = None  # a date, or a datetime when a time was given
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    description: str = ""
    event_id: Optional[int] = None  # the event this task belongs to

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED


@dataclass(frozen=True)
class CalendarItem:
    """An event or a task, tagged with its kind."""
    kind: ItemKind
    item: Union[EventItem, TaskItem]

    @classmethod
    def event(cls, event: EventItem) -> "CalendarItem":
        return cls(ItemKind.EVENT, event)

    @classmethod
    def task(cls, task: TaskItem) -> "CalendarItem":
        return cls(ItemKind.TASK, task)

    @property
    def is_event(self) -> bool:
        return self.kind is ItemKind.EVENT

    @property
    def label(self) -> str:
        if self.kind is ItemKind.EVENT:
            return self.item.name
        return self.item.title


@dataclass
class CalendarData:
    """One snapshot of the events and tasks collections."""
    events: list[EventItem] = field(default_factory=list)
    tasks: list[TaskItem] = field(default_factory=list)


class DataSource(ABC):
    """Abstract base class for data sources.

    Subclass this to read events and tasks from somewhere new.
    """

    @abstractmethod
    def fetch(self, data: CalendarData) -> None:
        """Fetch events and tasks and add them to CalendarData.

        Args:
            data: The CalendarData object to populate (mutated in place).
        """
        ...
