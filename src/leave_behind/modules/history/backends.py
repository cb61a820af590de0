"""
Storage backends for the event history.

The tracker only needs a load()/save() pair; the host decides where the
events live.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Sequence

from .models import ItemEvent

logger = logging.getLogger(__name__)


class HistoryBackend(ABC):
    """Host-supplied persistence for the event history."""

    @abstractmethod
    def load(self) -> List[ItemEvent]:
        """Return the persisted events in append order."""
        pass

    @abstractmethod
    def save(self, events: Sequence[ItemEvent]) -> None:
        """Persist the full event sequence, replacing what was stored."""
        pass


class JsonFileBackend(HistoryBackend):
    """
    Store history as a JSON array in a single file.

    Each element is ItemEvent.to_dict(). A missing file loads as empty history.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> List[ItemEvent]:
        if not self.path.exists():
            logger.debug(f"No history file at {self.path}")
            return []

        with self.path.open("r", encoding="utf-8") as f:
            data = json.load(f)

        return [ItemEvent.from_dict(row) for row in data]

    def save(self, events: Sequence[ItemEvent]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump([e.to_dict() for e in events], f)
        tmp.replace(self.path)
        logger.debug(f"Saved {len(events)} events to {self.path}")
