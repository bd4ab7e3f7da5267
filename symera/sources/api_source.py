"""REST data source for the Symera events and tasks endpoints."""

import logging
from datetime import tzinfo
from typing import Optional

import requests

from symera.config import ApiConfig
from symera.sources.base import CalendarData, DataSource
from symera.sources.records import parse_events, parse_tasks

logger = logging.getLogger(__name__)


class ApiSource(DataSource):
    """Fetch the current user's events and tasks from the Symera API."""

    def __init__(self, config: ApiConfig, local_tz: Optional[tzinfo] = None):
        self.config = config
        self.local_tz = local_tz
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if config.token:
            self.session.headers["Authorization"] = f"Bearer {config.token}"
        # Symera base URL (strip trailing slash)
        self.base_url = config.url.rstrip("/")

    def fetch(self, data: CalendarData) -> None:
        """Fetch events and tasks and add them to CalendarData.

        Raises:
            requests.RequestException: if either request fails.
        """
        logger.info("Fetching events and tasks from %s", self.base_url)

        events = parse_events(self._get_list("/api/events"), self.local_tz)
        tasks = parse_tasks(self._get_list("/api/tasks"), self.local_tz)

        data.events.extend(events)
        data.tasks.extend(tasks)
        logger.info("Added %d events and %d tasks from the API", len(events), len(tasks))

    def _get_list(self, path: str) -> list[dict]:
        """GET a JSON array; a null body counts as an empty collection."""
        resp = self.session.get(f"{self.base_url}{path}", timeout=self.config.timeout)
        resp.raise_for_status()

        payload = resp.json()
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise requests.RequestException(
                f"Expected a JSON array from {path}, got {type(payload).__name__}"
            )
        logger.debug("GET %s returned %d records", path, len(payload))
        return payload
