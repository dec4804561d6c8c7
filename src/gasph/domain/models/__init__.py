"""Domain models for GasPh."""

from gasph.domain.models.coordinate import BoundingBox, Coordinate, LocationData
from gasph.domain.models.error_details import ErrorDetails
from gasph.domain.models.fuel_type import ALL_FUEL_TYPES, FuelType
from gasph.domain.models.gas_station import GasStation
from gasph.domain.models.price import (
    BestPrice,
    BestPriceResult,
    BestPriceStats,
    CommunityPrice,
    DoePrice,
    EnhancedPriceReport,
    FavoriteStationPrice,
    PricePoint,
    StationDetails,
    StationSummary,
    UserContribution,
)
from gasph.domain.models.price_cycle import CycleStatus, PriceCycle
from gasph.domain.models.station_report import (
    ReportReason,
    ReportStatus,
    ReportType,
    StationReport,
)
from gasph.domain.models.user_profile import AdminStats, AuthSession, UserProfile

__all__ = [
    "ALL_FUEL_TYPES",
    "AdminStats",
    "AuthSession",
    "BestPrice",
    "BestPriceResult",
    "BestPriceStats",
    "BoundingBox",
    "CommunityPrice",
    "Coordinate",
    "CycleStatus",
    "DoePrice",
    "EnhancedPriceReport",
    "ErrorDetails",
    "FavoriteStationPrice",
    "FuelType",
    "GasStation",
    "LocationData",
    "PriceCycle",
    "PricePoint",
    "ReportReason",
    "ReportStatus",
    "ReportType",
    "StationDetails",
    "StationReport",
    "StationSummary",
    "UserContribution",
    "UserProfile",
]
