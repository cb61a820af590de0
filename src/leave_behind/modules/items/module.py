"""ItemsModule - Stamp the item ledger into history on arrival."""

import logging
from typing import Dict, Optional

from leave_behind.modules.base import PlaceModule
from leave_behind.core.bus import Event, EventBus, EventFilter
from leave_behind.core.geo import Coordinate
from leave_behind.core.registry import PlaceRegistry
from leave_behind.modules.history.store import EventHistoryStore

from .ledger import ItemLedger

logger = logging.getLogger(__name__)


class ItemsModule(PlaceModule):
    """
    Item ledger module.

    On presence.entered, appends one ItemEvent per ledger item to the history,
    using the place's name and center and the arrival time.

    Events Consumed:
    - presence.entered
    """

    def __init__(self, ledger: ItemLedger, history: EventHistoryStore) -> None:
        self._bus: Optional[EventBus] = None
        self._registry: Optional[PlaceRegistry] = None
        self.ledger = ledger
        self.history = history

    @property
    def id(self) -> str:
        return "items"

    def attach(self, bus: EventBus, registry: PlaceRegistry) -> None:
        """Attach to tracker components."""
        self._bus = bus
        self._registry = registry

        bus.subscribe(
            handler=self._on_entered,
            event_filter=EventFilter(event_type="presence.entered"),
        )

        logger.info("ItemsModule attached")

    def _on_entered(self, event: Event) -> None:
        """Record the whole ledger at the entered place."""
        if not len(self.ledger):
            logger.debug(f"No items to record at {event.place_id}")
            return

        place_name = event.payload["place_name"]
        coordinate = Coordinate(
            latitude=event.payload["latitude"],
            longitude=event.payload["longitude"],
        )
        events = self.ledger.events_for_arrival(place_name, coordinate, event.timestamp)
        self.history.append_all(events)

        logger.info(f"Recorded {len(events)} items at {place_name}")

    # State Persistence

    def dump_state(self) -> Dict:
        """
        Dump ledger membership for persistence.

        Returns:
            State dictionary
        """
        return {
            "version": 1,
            "items": [
                {"name": item.name, "always_take": item.always_take}
                for item in self.ledger.all_items()
            ],
        }

    def restore_state(self, state: Dict) -> None:
        """
        Restore ledger membership from dump_state() output.

        Args:
            state: State dictionary
        """
        version = state.get("version", 1)
        if version != 1:
            logger.warning(f"Unknown state version {version}, resetting")
            return

        for data in state.get("items", []):
            name = data.get("name")
            if not isinstance(name, str) or not name.strip():
                logger.warning(f"Skipping item with invalid name in state: {data!r}")
                continue
            if name in self.ledger:
                continue
            self.ledger.add(name, always_take=data.get("always_take", True))

        logger.info(f"Restored {len(self.ledger)} items from state")
