"""Holds the latest events/tasks snapshot and the index built from it."""

import logging
from typing import Iterable, Optional

from symera.engine.index import DateBucketIndex, build_index
from symera.sources.base import EventItem, TaskItem

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Latest-wins holder for calendar snapshots.

    Each refresh takes a generation number from begin_refresh() before it
    starts fetching. When it finishes, apply() installs its result only if
    no later refresh has been started since; otherwise the result is stale
    and is dropped.
    """

    def __init__(self):
        self._started = 0
        self._installed = 0
        self._events: list[EventItem] = []
        self._tasks: list[TaskItem] = []
        self._index: DateBucketIndex = {}

    @property
    def generation(self) -> int:
        """Generation of the installed snapshot (0 before the first one)."""
        return self._installed

    @property
    def events(self) -> list[EventItem]:
        return list(self._events)

    @property
    def tasks(self) -> list[TaskItem]:
        return list(self._tasks)

    @property
    def index(self) -> DateBucketIndex:
        return self._index

    def begin_refresh(self) -> int:
        self._started += 1
        return self._started

    def apply(
        self,
        generation: int,
        events: Optional[Iterable[EventItem]],
        tasks: Optional[Iterable[TaskItem]],
    ) -> bool:
        """Install a fetched snapshot. Returns False if it was stale."""
        if generation != self._started or generation <= self._installed:
            logger.debug(
                "Discarding stale snapshot (generation %d, latest started %d, installed %d)",
                generation, self._started, self._installed,
            )
            return False

        self._events = list(events or ())
        self._tasks = list(tasks or ())
        self._index = build_index(self._events, self._tasks)
        self._installed = generation
        logger.info(
            "Installed snapshot %d: %d events, %d tasks",
            generation, len(self._events), len(self._tasks),
        )
        return True
