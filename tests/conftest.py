"""
Pytest configuration and shared fixtures.
"""

from datetime import date, datetime, time

import pytest

from symera.engine.clock import FixedClock
from symera.sources.base import EventItem, TaskItem, TaskPriority, TaskStatus


@pytest.fixture
def clock():
    """Clock pinned to Sunday 2025-06-15."""
    return FixedClock(date(2025, 6, 15))


@pytest.fixture
def wedding():
    return EventItem(
        id=1,
        name="Wedding",
        type="wedding",
        start_date=date(2025, 6, 15),
        end_date=date(2025, 6, 16),
        start_time=time(16, 0),
    )


@pytest.fixture
def photographer_task():
    return TaskItem(
        id=1,
        title="Book photographer",
        due_date=datetime(2025, 6, 15, 10, 0),
        status=TaskStatus.TODO,
        priority=TaskPriority.HIGH,
    )


@pytest.fixture
def sample_records():
    """Raw /api/events and /api/tasks payloads."""
    return {
        "events": [
            {
                "id": 1,
                "name": "Wedding",
                "type": "wedding",
                "startDate": "2025-06-15",
                "endDate": "2025-06-16",
                "startTime": "16:00",
                "endTime": "23:30",
            },
            {
                "id": 2,
                "name": "Rehearsal dinner",
                "type": "social",
                "date": "2025-06-14T19:00:00",
            },
        ],
        "tasks": [
            {
                "id": 1,
                "title": "Book photographer",
                "dueDate": "2025-06-15T10:00",
                "status": "todo",
                "priority": "high",
            },
            {
                "id": 2,
                "title": "Order flowers",
                "description": "Peonies for the ceremony",
                "dueDate": "2025-06-10",
                "status": "completed",
                "priority": "medium",
            },
            {
                "id": 3,
                "title": "Seating plan",
                "status": "in_progress",
                "priority": "low",
            },
        ],
    }
