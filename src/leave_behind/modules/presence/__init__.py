"""
Presence module for leave-behind.

Tracks WHICH registered place the user is in, from a stream of position samples.

Features:
- First-match containment in registration order
- One session at a time (no switching mid-dwell)
- Time-agnostic engine (capture time is passed in, no internal timers)
- Explicit start/stop lifecycle; stopping is silent

Events Emitted:
- presence.entered
- presence.left (payload carries dwell_seconds)
"""

from .module import PresenceModule
from .models import (
    PresenceSession,
    PresenceState,
    PresenceTransition,
    TrackingStatus,
    TransitionType,
)
from .engine import PresenceEngine

__all__ = [
    "PresenceModule",
    "PresenceEngine",
    "PresenceSession",
    "PresenceState",
    "PresenceTransition",
    "TrackingStatus",
    "TransitionType",
]
