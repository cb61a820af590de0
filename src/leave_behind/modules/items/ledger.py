"""
ItemLedger for the list of items the user carries.

The whole ledger is stamped into history on arrival; only the
always-take subset is offered in reminders.
"""

from datetime import datetime
from typing import Dict, List, Optional
import logging

from leave_behind.core.geo import Coordinate
from leave_behind.modules.history.models import ItemEvent

from .models import Item

logger = logging.getLogger(__name__)


class ItemLedger:
    """Mutable, insertion-ordered set of items keyed by name."""

    def __init__(self) -> None:
        self._items: Dict[str, Item] = {}

    def add(self, name: str, always_take: bool = True) -> Item:
        """
        Add a new item.

        Args:
            name: Unique item name
            always_take: Remind about this item when leaving (default: True)

        Returns:
            The created Item

        Raises:
            ValueError: If the name is blank or already exists
        """
        if not name or not name.strip():
            raise ValueError("Item name must not be blank")
        if name in self._items:
            raise ValueError(f"Item '{name}' already exists")

        item = Item(name=name, always_take=always_take)
        self._items[name] = item
        logger.info(f"Added item: {name} (always_take={always_take})")
        return item

    def get(self, name: str) -> Optional[Item]:
        return self._items.get(name)

    def toggle_always(self, name: str) -> bool:
        """
        Flip the always-take flag of an item.

        Returns:
            The new flag value

        Raises:
            ValueError: If the item doesn't exist
        """
        item = self._items.get(name)
        if not item:
            raise ValueError(f"Item '{name}' not found")

        item.always_take = not item.always_take
        logger.debug(f"Item {name}: always_take={item.always_take}")
        return item.always_take

    def remove(self, name: str) -> None:
        """
        Remove an item.

        Raises:
            ValueError: If the item doesn't exist
        """
        if name not in self._items:
            raise ValueError(f"Item '{name}' not found")

        del self._items[name]
        logger.info(f"Removed item: {name}")

    def clear(self) -> None:
        """Remove every item."""
        self._items.clear()
        logger.info("Cleared all items")

    def all_items(self) -> List[Item]:
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def candidates_always(self) -> List[str]:
        """
        Names of always-take items, in insertion order.

        This is exactly the list offered to the reminder sink.
        """
        return [item.name for item in self._items.values() if item.always_take]

    def events_for_arrival(
        self, place_name: str, coordinate: Coordinate, timestamp: datetime
    ) -> List[ItemEvent]:
        """
        Build one history event per ledger item for an arrival.

        Every item is included, not only always-take ones.

        Args:
            place_name: Name of the place entered
            coordinate: Coordinate recorded for the place
            timestamp: Arrival time

        Returns:
            List of ItemEvents in ledger order
        """
        return [
            ItemEvent(
                item_name=item.name,
                place_name=place_name,
                coordinate=coordinate,
                timestamp=timestamp,
            )
            for item in self._items.values()
        ]
