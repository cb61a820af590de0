"""
Core components of the leave-behind tracker.

This package contains:
- geo: Coordinate and haversine distance
- place: Place dataclass
- registry: PlaceRegistry for places and per-place config
- bus: Event Bus implementation
"""

from leave_behind.core.geo import Coordinate, InvalidSample, distance_meters, is_within
from leave_behind.core.place import InvalidPlace, Place
from leave_behind.core.registry import PlaceRegistry
from leave_behind.core.bus import Event, EventBus, EventFilter

__all__ = [
    "Coordinate",
    "InvalidSample",
    "distance_meters",
    "is_within",
    "InvalidPlace",
    "Place",
    "PlaceRegistry",
    "Event",
    "EventBus",
    "EventFilter",
]
