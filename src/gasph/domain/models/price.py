"""Price domain models: community reports, DOE reference prices and best-price rows."""

import math
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict

from gasph.domain.models.gas_station import GasStation


class CommunityPrice(BaseModel):
    """An active community price report (row of the active price report view)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    station_id: str
    fuel_type: str
    price: float
    user_id: str | None = None
    reported_at: datetime | None = None
    expires_at: datetime | None = None
    cycle_id: str | None = None
    station_name: str | None = None
    station_brand: str | None = None
    station_city: str | None = None
    station_latitude: float | None = None
    station_longitude: float | None = None
    reporter_username: str | None = None
    confirmations_count: int = 0
    confidence_score: float | None = None


class DoePrice(BaseModel):
    """Department of Energy reference price range for a station and fuel type."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    gas_station_id: str
    fuel_type: str
    min_price: float | None = None
    common_price: float | None = None
    max_price: float | None = None
    week_of: date | None = None
    source_type: str | None = None

    @property
    def has_price(self) -> bool:
        """True when at least one of the three price columns is set."""
        return (
            self.min_price is not None
            or self.common_price is not None
            or self.max_price is not None
        )


class PricePoint(BaseModel):
    """A station/fuel combination with a community price, a DOE price, or both."""

    model_config = ConfigDict(frozen=True)

    station: GasStation
    fuel_type: str
    community_price: CommunityPrice | None = None
    doe_price: DoePrice | None = None

    @property
    def doe_min_price(self) -> float:
        """DOE minimum price, or infinity when it is missing or zero."""
        if self.doe_price is not None and self.doe_price.min_price:
            return self.doe_price.min_price
        return math.inf

    @property
    def effective_price(self) -> float:
        """Community price when available, otherwise the DOE minimum."""
        if self.community_price is not None:
            return self.community_price.price
        return self.doe_min_price


class BestPrice(BaseModel):
    """A ranked best-price entry shown to the user."""

    model_config = ConfigDict(frozen=True)

    station_id: str
    name: str
    brand: str | None = None
    city: str | None = None
    latitude: float
    longitude: float
    distance: float | None = None
    fuel_type: str
    price: float | None = None
    user_id: str | None = None
    reported_at: datetime | None = None
    cycle_id: str | None = None
    reporter_username: str | None = None
    confirmations_count: int | None = None
    confidence_score: float | None = None
    min_price: float | None = None
    common_price: float | None = None
    max_price: float | None = None
    week_of: date | None = None
    source_type: str | None = None

    @property
    def display_price(self) -> float | None:
        """Community price, falling back to the DOE minimum."""
        return self.price if self.price is not None else self.min_price

    @classmethod
    def from_point(cls, point: PricePoint) -> "BestPrice":
        """Flatten a price point into a best-price entry."""
        station = point.station
        community = point.community_price
        doe = point.doe_price
        return cls(
            station_id=station.id,
            name=station.name,
            brand=station.brand,
            city=station.city,
            latitude=station.latitude,
            longitude=station.longitude,
            distance=station.distance,
            fuel_type=point.fuel_type,
            price=community.price if community else None,
            user_id=community.user_id if community else None,
            reported_at=community.reported_at if community else None,
            cycle_id=community.cycle_id if community else None,
            reporter_username=community.reporter_username if community else None,
            confirmations_count=community.confirmations_count if community else None,
            confidence_score=community.confidence_score if community else None,
            min_price=doe.min_price if doe else None,
            common_price=doe.common_price if doe else None,
            max_price=doe.max_price if doe else None,
            week_of=doe.week_of if doe else None,
            source_type=doe.source_type if doe else None,
        )


class BestPriceStats(BaseModel):
    """Summary of a best-price listing."""

    model_config = ConfigDict(frozen=True)

    count: int
    lowest_price: float | None
    highest_price: float | None
    average_price: float | None


class BestPriceResult(BaseModel):
    """Best-price listing plus its summary (None when the listing is empty)."""

    model_config = ConfigDict(frozen=True)

    prices: list[BestPrice]
    stats: BestPriceStats | None = None


class FavoriteStationPrice(BaseModel):
    """A favorite station with the price of the user's preferred fuel."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str | None = None
    brand: str | None = None
    city: str | None = None
    distance: float | None = None
    fuel_type: str | None = None
    price: float | None = None
    confirmations_count: int | None = None
    latitude: float | None = None
    longitude: float | None = None


class StationSummary(BaseModel):
    """Minimal station info embedded in other rows."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str | None = None
    brand: str | None = None
    city: str | None = None


class UserContribution(BaseModel):
    """A price report submitted by the signed-in user."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    fuel_type: str
    price: float
    reported_at: datetime | None = None
    confirmations_count: int = 0
    station: StationSummary | None = None


class EnhancedPriceReport(CommunityPrice):
    """Community price annotated for the viewing user."""

    is_own_report: bool = False
    user_has_confirmed: bool = False


class StationDetails(BaseModel):
    """A station with its active community prices."""

    model_config = ConfigDict(frozen=True)

    station: GasStation
    community_prices: list[EnhancedPriceReport]
    doe_prices: list[DoePrice] = []
