"""
History module for leave-behind.

Append-only log of item/place co-occurrence events, persisted through a
host-supplied backend.
"""

from .store import EventHistoryStore
from .backends import HistoryBackend, JsonFileBackend
from .models import ItemEvent

__all__ = [
    "EventHistoryStore",
    "HistoryBackend",
    "JsonFileBackend",
    "ItemEvent",
]
