"""Geographic value types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned latitude/longitude rectangle used as a range pre-filter."""

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def contains(self, point: Coordinate) -> bool:
        """Return True if the point lies inside the box (edges included)."""
        return (
            self.min_lat <= point.latitude <= self.max_lat
            and self.min_lng <= point.longitude <= self.max_lng
        )


@dataclass(frozen=True)
class LocationData(Coordinate):
    """A user location, flagged when it is the fallback rather than a device fix."""

    is_default_location: bool = False
