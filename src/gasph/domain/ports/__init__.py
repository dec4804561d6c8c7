"""Ports (interfaces) for the ports-and-adapters architecture."""

from gasph.domain.ports.favorite_repository import FavoriteRepository
from gasph.domain.ports.location_provider import LocationProvider, PermissionStatus
from gasph.domain.ports.price_cycle_repository import PriceCycleRepository
from gasph.domain.ports.price_repository import PriceRepository
from gasph.domain.ports.profile_repository import ProfileRepository
from gasph.domain.ports.station_report_repository import StationReportRepository
from gasph.domain.ports.station_repository import StationRepository

__all__ = [
    "FavoriteRepository",
    "LocationProvider",
    "PermissionStatus",
    "PriceCycleRepository",
    "PriceRepository",
    "ProfileRepository",
    "StationReportRepository",
    "StationRepository",
]
