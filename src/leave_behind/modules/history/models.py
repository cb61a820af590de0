"""Data models for the event history."""

from dataclasses import dataclass
from datetime import datetime, UTC

from leave_behind.core.geo import Coordinate


@dataclass(frozen=True)
class ItemEvent:
    """
    An item-at-place-at-time observation.

    Immutable once appended to history. Serialized with the field names
    hosts persist: itemName, placeName, coordinate, timestamp (epoch ms).
    Naive timestamps are taken as UTC.
    """

    item_name: str
    place_name: str
    coordinate: Coordinate
    timestamp: datetime

    def __post_init__(self):
        if self.timestamp.tzinfo is None:
            object.__setattr__(self, "timestamp", self.timestamp.replace(tzinfo=UTC))

    @property
    def timestamp_ms(self) -> int:
        """Timestamp as Unix epoch milliseconds."""
        return int(self.timestamp.timestamp() * 1000)

    def to_dict(self) -> dict:
        """Serialize to dict."""
        return {
            "itemName": self.item_name,
            "placeName": self.place_name,
            "coordinate": self.coordinate.to_dict(),
            "timestamp": self.timestamp_ms,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ItemEvent":
        """Deserialize from dict."""
        return cls(
            item_name=data["itemName"],
            place_name=data["placeName"],
            coordinate=Coordinate.from_dict(data["coordinate"]),
            timestamp=datetime.fromtimestamp(int(data["timestamp"]) / 1000.0, UTC),
        )
