"""Data source reading an exported {"events": [...], "tasks": [...]} snapshot."""

import json
import logging
from datetime import tzinfo
from pathlib import Path
from typing import Optional

from symera.sources.base import CalendarData, DataSource
from symera.sources.records import parse_events, parse_tasks

logger = logging.getLogger(__name__)


class JsonFileSource(DataSource):
    """Load events and tasks from a JSON snapshot file."""

    def __init__(self, path: str | Path, local_tz: Optional[tzinfo] = None):
        self.path = Path(path)
        self.local_tz = local_tz

    def fetch(self, data: CalendarData) -> None:
        """Read the snapshot file and add its items to CalendarData.

        Raises:
            OSError: if the file cannot be read.
            ValueError: if it is not a JSON object.
        """
        logger.info("Loading snapshot from %s", self.path)
        with open(self.path) as f:
            payload = json.load(f)

        if not isinstance(payload, dict):
            raise ValueError(f"{self.path}: expected a JSON object with 'events' and 'tasks'")

        events = parse_events(payload.get("events"), self.local_tz)
        tasks = parse_tasks(payload.get("tasks"), self.local_tz)

        data.events.extend(events)
        data.tasks.extend(tasks)
        logger.info("Loaded %d events and %d tasks", len(events), len(tasks))
