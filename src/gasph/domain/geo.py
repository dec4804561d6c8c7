"""Proximity computations on a spherical Earth.

All functions are pure. Inputs are not range-checked: NaN or out-of-range
coordinates produce NaN or meaningless output, which callers filter out.
"""

import math

from gasph.domain.models.coordinate import BoundingBox, Coordinate

EARTH_RADIUS_KM = 6371.0

# Radius from which the coarse (shrunk) bounding box may be used
LARGE_RADIUS_THRESHOLD_KM = 25.0
LARGE_RADIUS_SHRINK_FACTOR = 0.9


def distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance between two coordinates using the haversine formula.

    Args:
        a: First coordinate.
        b: Second coordinate.

    Returns:
        Distance in kilometers.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    delta_lat = math.radians(b.latitude - a.latitude)
    delta_lon = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push h a hair past 1 for antipodal points
    h = min(h, 1.0)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def bounding_box(
    center: Coordinate,
    radius_km: float,
    optimize_for_large_radius: bool = False,
    *,
    large_radius_threshold_km: float = LARGE_RADIUS_THRESHOLD_KM,
    shrink_factor: float = LARGE_RADIUS_SHRINK_FACTOR,
) -> BoundingBox:
    """Latitude/longitude box containing every point within radius_km of center.

    With optimize_for_large_radius and radius_km >= large_radius_threshold_km
    the box is built for radius_km * shrink_factor. That box may miss points
    near the edge of the true radius, so callers must still filter by exact
    distance.

    When the box reaches a pole, latitude is clamped to [-90, 90] and the
    longitude span becomes the full [-180, 180].

    Args:
        center: Center of the search area.
        radius_km: Search radius in kilometers.
        optimize_for_large_radius: Shrink the box for large radii.
        large_radius_threshold_km: Radius from which shrinking applies.
        shrink_factor: Multiplier applied to the radius when shrinking.

    Returns:
        The bounding box in degrees.

    Raises:
        ValueError: If radius_km is negative.
    """
    if radius_km < 0:
        raise ValueError(f"radius_km must not be negative, got {radius_km}")

    effective_radius = radius_km
    if optimize_for_large_radius and radius_km >= large_radius_threshold_km:
        effective_radius = radius_km * shrink_factor

    angular = effective_radius / EARTH_RADIUS_KM
    lat = math.radians(center.latitude)
    lng = math.radians(center.longitude)

    min_lat = lat - angular
    max_lat = lat + angular

    half_pi = math.pi / 2
    sin_angular = math.sin(angular)
    cos_lat = math.cos(lat)
    if max_lat >= half_pi or min_lat <= -half_pi or sin_angular >= cos_lat:
        return BoundingBox(
            min_lat=max(math.degrees(min_lat), -90.0),
            max_lat=min(math.degrees(max_lat), 90.0),
            min_lng=-180.0,
            max_lng=180.0,
        )

    # Meridians converge away from the equator, so the longitude span widens
    delta_lng = math.asin(sin_angular / cos_lat)

    return BoundingBox(
        min_lat=math.degrees(min_lat),
        max_lat=math.degrees(max_lat),
        min_lng=math.degrees(lng - delta_lng),
        max_lng=math.degrees(lng + delta_lng),
    )


def format_distance(distance_km: float) -> str:
    """Human-readable distance: whole meters below 1 km, else one-decimal kilometers."""
    if distance_km < 1:
        meters = math.floor(distance_km * 1000 + 0.5)
        # 0.9995 km and above round up to a full kilometer
        if meters < 1000:
            return f"{meters} m"
    return f"{distance_km:.1f} km"
