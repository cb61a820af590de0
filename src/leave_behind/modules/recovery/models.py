"""Data models for recovery suggestions."""

from dataclasses import dataclass
from datetime import datetime

from leave_behind.core.geo import Coordinate


@dataclass(frozen=True)
class RecoverySuggestion:
    """
    A candidate place where an item may have been left.

    Attributes:
        place_name: Place the item was logged at
        score: Recency/frequency score (higher is more likely)
        last_seen: Timestamp of the event that produced the score
    """

    place_name: str
    score: float
    last_seen: datetime

    def minutes_since(self, now: datetime) -> int:
        """Whole minutes between last_seen and now."""
        return int((now - self.last_seen).total_seconds() // 60)


@dataclass(frozen=True)
class HeatmapPoint:
    """One weighted point for a history heatmap."""

    coordinate: Coordinate
    weight: float = 1.0
