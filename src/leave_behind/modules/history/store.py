"""
Append-only event history.

Insertion order is chronological; recency scoring depends on it.
"""

import logging
from typing import Iterable, List, Optional

from .backends import HistoryBackend
from .models import ItemEvent

logger = logging.getLogger(__name__)


class EventHistoryStore:
    """
    Append-only log of ItemEvents, mirrored to an optional backend.

    Every mutation saves the full sequence. Backend failures are logged and
    never raised: the worst case is an unsaved event, not a broken tracker.
    After a failed load(), saving is suspended until a load() succeeds, so a
    partial in-memory log never replaces the stored one.
    No dedup and no compaction.
    """

    def __init__(self, backend: Optional[HistoryBackend] = None) -> None:
        self._backend = backend
        self._events: List[ItemEvent] = []
        self._load_failed = False

    def load(self) -> int:
        """
        Replace in-memory history with what the backend holds.

        Returns:
            Number of events loaded (0 on failure or without a backend)
        """
        if not self._backend:
            return 0

        try:
            events = self._backend.load()
        except Exception as e:
            logger.error(f"Failed to load history: {e}", exc_info=True)
            self._load_failed = True
            return 0

        self._load_failed = False
        self._events = list(events)
        logger.info(f"Loaded {len(self._events)} history events")
        return len(self._events)

    def append(self, event: ItemEvent) -> None:
        """
        Append a single event.

        Raises:
            ValueError: If the event is older than the last logged event
        """
        self.append_all([event])

    def append_all(self, events: Iterable[ItemEvent]) -> None:
        """
        Append events in order.

        Either all events are appended or none are.

        Raises:
            ValueError: If the events would break timestamp order
        """
        batch = list(events)
        if not batch:
            return

        last = self._events[-1].timestamp if self._events else None
        for event in batch:
            if last is not None and event.timestamp < last:
                raise ValueError(
                    f"Event for '{event.item_name}' at {event.timestamp} is older than "
                    f"the last logged event ({last})"
                )
            last = event.timestamp

        self._events.extend(batch)
        logger.debug(f"Appended {len(batch)} events (total={len(self._events)})")
        self._save()

    def all_events(self) -> List[ItemEvent]:
        """All events in append order."""
        return list(self._events)

    def events_for_item(self, item_name: str) -> List[ItemEvent]:
        return [e for e in self._events if e.item_name == item_name]

    def clear(self) -> None:
        """Erase all history (and the persisted copy, even after a failed load)."""
        self._events = []
        self._load_failed = False
        logger.info("Cleared history")
        self._save()

    def __len__(self) -> int:
        return len(self._events)

    def _save(self) -> None:
        if not self._backend:
            return

        if self._load_failed:
            logger.warning(
                f"History was not loaded; not saving {len(self._events)} events over stored history"
            )
            return

        try:
            self._backend.save(list(self._events))
        except Exception as e:
            logger.error(f"Failed to save history: {e}", exc_info=True)
