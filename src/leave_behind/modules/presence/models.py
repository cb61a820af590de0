"""Data models for the presence tracker.

All state classes are frozen (immutable); the engine replaces its state
object on every change.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from leave_behind.core.place import Place


class TransitionType(Enum):
    """The kind of presence transition."""

    ENTERED = "entered"
    LEFT = "left"


class TrackingStatus(Enum):
    """Coarse tracker status for display."""

    IDLE = "idle"  # Not tracking
    WATCHING = "watching"  # Tracking, outside every place
    INSIDE = "inside"  # Tracking, inside a place


@dataclass(frozen=True)
class PresenceSession:
    """The live record of "currently inside place X since time T"."""

    place: Place
    entered_at: datetime


@dataclass(frozen=True)
class PresenceState:
    """Runtime state of the tracker (Immutable).

    Attributes:
        session: Active session, None when outside every place.
        last_sample_at: Capture time of the last accepted sample.
    """

    session: PresenceSession | None = None
    last_sample_at: datetime | None = None

    @property
    def is_inside(self) -> bool:
        return self.session is not None


@dataclass(frozen=True)
class PresenceTransition:
    """An enter or exit produced by a position sample.

    Attributes:
        kind: ENTERED or LEFT.
        place: The place entered or left.
        timestamp: Capture time of the sample that caused the transition.
        dwell: Time spent inside (LEFT only).
    """

    kind: TransitionType
    place: Place
    timestamp: datetime
    dwell: timedelta | None = None

    @property
    def dwell_seconds(self) -> int | None:
        """Dwell floored to whole seconds (None for ENTERED)."""
        if self.dwell is None:
            return None
        return int(self.dwell.total_seconds())
