"""
leave-behind: reminders for the things you carry.

This library provides the core of a leave-behind detector:
- Place registry of circular geofences
- Presence tracking from position samples (enter/exit with dwell time)
- Dwell-gated "take with you" reminders
- Item event history and "where did I leave it?" suggestions
"""

from leave_behind.core.geo import Coordinate, InvalidSample, distance_meters
from leave_behind.core.place import InvalidPlace, Place
from leave_behind.core.registry import PlaceRegistry
from leave_behind.core.bus import Event, EventBus, EventFilter
from leave_behind.session import TrackingSession

__version__ = "0.1.0"

__all__ = [
    "Coordinate",
    "InvalidSample",
    "distance_meters",
    "InvalidPlace",
    "Place",
    "PlaceRegistry",
    "Event",
    "EventBus",
    "EventFilter",
    "TrackingSession",
]
