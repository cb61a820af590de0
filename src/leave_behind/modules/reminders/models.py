"""Data models for leave-behind reminders."""

from dataclasses import dataclass
from typing import Sequence, Tuple

REMINDER_TITLE = "Reminder"
FALLBACK_BODY = "Did you take everything?"


def format_body(item_names: Sequence[str]) -> str:
    """Build the reminder body: one bullet per item, or a generic prompt."""
    if not item_names:
        return FALLBACK_BODY
    return "Take with you:\n• " + "\n• ".join(item_names)


@dataclass(frozen=True)
class Reminder:
    """
    A reminder produced when leaving a place.

    Attributes:
        place_name: Name of the place being left
        dwell_seconds: Whole seconds spent inside
        item_names: Always-take item names, in ledger order
        title: Short notification title
        subtitle: Second line ("Leaving <place>")
        body: Main message text
    """

    place_name: str
    dwell_seconds: int
    item_names: Tuple[str, ...]
    title: str
    subtitle: str
    body: str

    @classmethod
    def build(cls, place_name: str, dwell_seconds: int, item_names: Sequence[str]) -> "Reminder":
        """Create a reminder with the standard notification text."""
        return cls(
            place_name=place_name,
            dwell_seconds=dwell_seconds,
            item_names=tuple(item_names),
            title=REMINDER_TITLE,
            subtitle=f"Leaving {place_name}",
            body=format_body(item_names),
        )

    def to_dict(self) -> dict:
        """Serialize to dict."""
        return {
            "place_name": self.place_name,
            "dwell_seconds": self.dwell_seconds,
            "item_names": list(self.item_names),
            "title": self.title,
            "subtitle": self.subtitle,
            "body": self.body,
        }
