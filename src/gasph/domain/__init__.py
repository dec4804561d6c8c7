"""Domain layer - models, ports and pure geographic logic."""

from gasph.domain.models import BoundingBox, Coordinate, GasStation, LocationData
from gasph.domain.ports import (
    FavoriteRepository,
    LocationProvider,
    PriceCycleRepository,
    PriceRepository,
    ProfileRepository,
    StationReportRepository,
    StationRepository,
)

__all__ = [
    "BoundingBox",
    "Coordinate",
    "FavoriteRepository",
    "GasStation",
    "LocationData",
    "LocationProvider",
    "PriceCycleRepository",
    "PriceRepository",
    "ProfileRepository",
    "StationReportRepository",
    "StationRepository",
]
