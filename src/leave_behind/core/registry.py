"""
PlaceRegistry for the set of places the user manages.

The registry owns places and their per-module config, not the tracking behavior.
"""

import itertools
from typing import Dict, List, Optional
import logging

from leave_behind.core.geo import Coordinate, InvalidSample, is_within
from leave_behind.core.place import InvalidPlace, Place

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_M = 60.0


class PlaceRegistry:
    """
    Ordered collection of places.

    Responsibilities:
    - Store places in registration order
    - Hand out stable place IDs
    - Answer containment queries (first match in registration order)
    - Store per-place module config

    Does NOT track presence, items, or reminders.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._places: Dict[str, Place] = {}
        self._id_counter = itertools.count(1)

    def _next_id(self) -> str:
        while True:
            candidate = f"place_{next(self._id_counter)}"
            if candidate not in self._places:
                return candidate

    def add_place(self, place: Place) -> Place:
        """
        Register a place at the end of the scan order.

        Args:
            place: The place to register

        Returns:
            The registered Place

        Raises:
            InvalidPlace: If the radius is not positive or the center is out of range
            ValueError: If a place with the same ID already exists
        """
        if not place.radius_meters > 0:
            raise InvalidPlace(
                f"Place '{place.name}' must have a positive radius (got {place.radius_meters})"
            )

        try:
            place.center.validate()
        except InvalidSample as e:
            raise InvalidPlace(f"Place '{place.name}' has an invalid center: {e}") from e

        if place.id in self._places:
            raise ValueError(f"Place with id '{place.id}' already exists")

        self._places[place.id] = place
        logger.info(f"Registered place: {place.id} ({place.name}, r={place.radius_meters}m)")

        return place

    def create_place(
        self,
        name: str,
        latitude: float,
        longitude: float,
        radius_meters: float = DEFAULT_RADIUS_M,
        id: Optional[str] = None,
    ) -> Place:
        """
        Create and register a new place.

        Args:
            name: Display name
            latitude: Center latitude in degrees
            longitude: Center longitude in degrees
            radius_meters: Radius in meters (default: 60)
            id: Optional explicit ID (generated if omitted)

        Returns:
            The created Place

        Raises:
            InvalidPlace: If the radius is not positive or the center is out of range
            ValueError: If the ID already exists
        """
        place = Place(
            id=id or self._next_id(),
            name=name,
            center=Coordinate(latitude=latitude, longitude=longitude),
            radius_meters=radius_meters,
        )
        return self.add_place(place)

    def get_place(self, place_id: str) -> Optional[Place]:
        """
        Get a place by ID.

        Args:
            place_id: The place ID

        Returns:
            The Place or None if not found
        """
        return self._places.get(place_id)

    def get_place_by_name(self, name: str) -> Optional[Place]:
        """
        Find a place by name (exact match, case-sensitive).

        Returns:
            First matching Place in registration order, or None
        """
        for place in self._places.values():
            if place.name == name:
                return place
        return None

    def all_places(self) -> List[Place]:
        """
        Get all places in registration order.

        Returns:
            List of all places
        """
        return list(self._places.values())

    def __len__(self) -> int:
        return len(self._places)

    def remove_place(self, place_id: str) -> Place:
        """
        Remove a place by ID.

        Args:
            place_id: The place ID

        Returns:
            The removed Place

        Raises:
            ValueError: If the place doesn't exist
        """
        place = self._places.pop(place_id, None)
        if place is None:
            raise ValueError(f"Place '{place_id}' does not exist")

        logger.info(f"Removed place: {place_id} ({place.name})")
        return place

    def remove_at(self, index: int) -> Place:
        """
        Remove the place at a position in the current registration order.

        Resolves the index to the place's ID before removing, so callers holding
        a stale listing should prefer remove_place().

        Raises:
            IndexError: If the index is negative or out of range
        """
        if index < 0:
            raise IndexError(f"Place index must be >= 0 (got {index})")

        place = self.all_places()[index]
        return self.remove_place(place.id)

    def clear(self) -> None:
        """Remove every place."""
        count = len(self._places)
        self._places.clear()
        logger.info(f"Cleared {count} places")

    def find_containing(self, coordinate: Coordinate) -> Optional[Place]:
        """
        Find the first place whose circle contains a coordinate.

        Overlapping places are resolved by registration order.

        Args:
            coordinate: The position to test

        Returns:
            The first containing Place or None
        """
        for place in self._places.values():
            if is_within(coordinate, place.center, place.radius_meters):
                return place
        return None

    def set_module_config(self, place_id: str, module_id: str, config: Dict) -> None:
        """
        Set module configuration for a place.

        Raises:
            ValueError: If the place doesn't exist
        """
        place = self.get_place(place_id)
        if not place:
            raise ValueError(f"Place '{place_id}' does not exist")

        place.modules[module_id] = config
        logger.debug(f"Set config for module '{module_id}' on place '{place_id}'")

    def get_module_config(self, place_id: str, module_id: str) -> Optional[Dict]:
        """
        Get module configuration for a place.

        Returns:
            Module configuration dict or None if the place or config is missing
        """
        place = self.get_place(place_id)
        if not place:
            return None

        return place.modules.get(module_id)
