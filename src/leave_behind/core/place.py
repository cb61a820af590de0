"""
Place dataclass.

A Place is a named circular region (center + radius) the user wants reminders for.
"""

from dataclasses import dataclass, field
from typing import Dict

from leave_behind.core.geo import Coordinate


class InvalidPlace(ValueError):
    """Raised when a place cannot be registered (non-positive radius, bad center)."""


@dataclass
class Place:
    """
    A registered circular region.

    Attributes:
        id: Stable identifier assigned at registration
        name: Display name (not required to be unique)
        center: Center of the circle
        radius_meters: Radius in meters, must be > 0
        modules: Per-module configuration blobs
    """

    id: str
    name: str
    center: Coordinate
    radius_meters: float
    modules: Dict[str, Dict] = field(default_factory=dict)
