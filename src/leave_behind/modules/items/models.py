"""Data models for the item ledger."""

from dataclasses import dataclass


@dataclass
class Item:
    """
    A tracked item.

    Attributes:
        name: Unique name (ledger key)
        always_take: Whether to remind about this item when leaving a place
    """

    name: str
    always_take: bool = True
