"""
Coordinate dataclass and great-circle helpers.

All containment tests in the tracker go through distance_meters().
"""

import math
from dataclasses import dataclass

EARTH_RADIUS_M = 6_371_000.0  # mean Earth radius in meters


class InvalidSample(ValueError):
    """Raised when a coordinate is outside the valid latitude/longitude range."""


@dataclass(frozen=True)
class Coordinate:
    """
    A WGS84 position in decimal degrees.

    Attributes:
        latitude: Latitude in degrees (-90..90)
        longitude: Longitude in degrees (-180..180)
    """

    latitude: float
    longitude: float

    def validate(self) -> "Coordinate":
        """
        Check that the coordinate is within range.

        Returns:
            The coordinate itself, for chaining

        Raises:
            InvalidSample: If latitude/longitude is out of range or not finite
        """
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise InvalidSample(f"Coordinate {self} is not finite")
        if abs(self.latitude) > 90.0:
            raise InvalidSample(f"Latitude {self.latitude} out of range")
        if abs(self.longitude) > 180.0:
            raise InvalidSample(f"Longitude {self.longitude} out of range")
        return self

    def to_dict(self) -> dict:
        """Serialize to dict."""
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, data: dict) -> "Coordinate":
        """Deserialize from dict."""
        return cls(latitude=float(data["latitude"]), longitude=float(data["longitude"]))


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    """
    Compute the haversine distance in meters between two coordinates.

    Args:
        a: First coordinate
        b: Second coordinate

    Returns:
        Distance in meters
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    c = 2.0 * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))
    return EARTH_RADIUS_M * c


def is_within(point: Coordinate, center: Coordinate, radius_meters: float) -> bool:
    """Check whether a point is inside or on the boundary of a circle."""
    return distance_meters(point, center) <= radius_meters
