"""Best price ranking service."""

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable
from typing import TypeVar

from gasph.application.services.nearby_station_service import NearbyStationService
from gasph.domain.errors import GasPhError
from gasph.domain.models.coordinate import LocationData
from gasph.domain.models.fuel_type import ALL_FUEL_TYPES
from gasph.domain.models.gas_station import GasStation
from gasph.domain.models.price import (
    BestPrice,
    BestPriceResult,
    BestPriceStats,
    CommunityPrice,
    DoePrice,
    PricePoint,
)
from gasph.domain.ports.price_repository import PriceRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


def chunked(items: list[str], size: int) -> list[list[str]]:
    """Split items into consecutive chunks of at most size elements."""
    return [items[i : i + size] for i in range(0, len(items), size)]


def sort_key(point: PricePoint) -> tuple[float, float, float]:
    """Effective price, then DOE minimum, then distance."""
    station_distance = point.station.distance
    return (
        point.effective_price,
        point.doe_min_price,
        station_distance if station_distance is not None else math.inf,
    )


def calculate_stats(prices: list[BestPrice]) -> BestPriceStats | None:
    """Summary of a ranked listing; None when it is empty."""
    if not prices:
        return None
    values = [p.display_price for p in prices if p.display_price is not None]
    return BestPriceStats(
        count=len(prices),
        lowest_price=prices[0].display_price,
        highest_price=max(values) if values else None,
        average_price=sum(values) / len(values) if values else None,
    )


class BestPriceService:
    """Ranks the cheapest fuel around the user from community and DOE prices."""

    def __init__(
        self,
        nearby_station_service: NearbyStationService,
        price_repository: PriceRepository,
        chunk_size: int = 100,
        result_limit: int = 10,
        large_radius_station_limit: int = 500,
    ) -> None:
        self._nearby_station_service = nearby_station_service
        self._price_repository = price_repository
        self._chunk_size = chunk_size
        self._result_limit = result_limit
        self._large_radius_station_limit = large_radius_station_limit

    async def get_best_prices(
        self,
        location: LocationData,
        fuel_type: str | None = None,
        max_distance: float = 15.0,
    ) -> BestPriceResult:
        """Cheapest price points within max_distance km of the location.

        Nothing is returned for the default fallback location, since
        distances from it would not mean anything to the user.
        """
        if location.is_default_location:
            logger.debug("Skipping best prices for default location")
            return BestPriceResult(prices=[], stats=None)

        limit = (
            self._large_radius_station_limit
            if self._nearby_station_service.is_large_radius(max_distance)
            else None
        )
        stations = await self._nearby_station_service.find_nearby(location, max_distance, limit)
        if not stations:
            return BestPriceResult(prices=[], stats=None)

        fuel_types = [fuel_type] if fuel_type else [str(ft) for ft in ALL_FUEL_TYPES]
        station_ids = [s.id for s in stations]
        community, doe = await asyncio.gather(
            self.fetch_community_prices(station_ids, fuel_type),
            self.fetch_doe_prices(station_ids, fuel_types),
        )

        points = create_price_points(stations, community, doe, fuel_types)
        if fuel_type:
            points = [p for p in points if p.fuel_type == fuel_type]
        points.sort(key=sort_key)

        prices = [BestPrice.from_point(p) for p in points[: self._result_limit]]
        logger.info(f"Ranked {len(points)} price points, returning {len(prices)}")
        return BestPriceResult(prices=prices, stats=calculate_stats(prices))

    async def _gather_chunks(
        self,
        station_ids: list[str],
        fetch: Callable[[list[str]], Awaitable[list[T]]],
        label: str,
    ) -> list[list[T]]:
        """Fetch all chunks concurrently; a failing chunk yields no rows."""

        async def fetch_chunk(chunk: list[str]) -> list[T]:
            try:
                return await fetch(chunk)
            except GasPhError as e:
                logger.error(f"Error fetching {label} prices chunk: {e}")
                return []

        return await asyncio.gather(
            *(fetch_chunk(chunk) for chunk in chunked(station_ids, self._chunk_size))
        )

    async def fetch_community_prices(
        self, station_ids: list[str], fuel_type: str | None = None
    ) -> dict[str, CommunityPrice]:
        """Community prices keyed by '<station_id>_<fuel_type>'; first row per key wins."""
        results = await self._gather_chunks(
            station_ids,
            lambda chunk: self._price_repository.find_community_prices(chunk, fuel_type),
            "community",
        )
        prices: dict[str, CommunityPrice] = {}
        for rows in results:
            for row in rows:
                prices.setdefault(f"{row.station_id}_{row.fuel_type}", row)
        return prices

    async def fetch_doe_prices(
        self, station_ids: list[str], fuel_types: list[str]
    ) -> dict[str, DoePrice]:
        """DOE prices keyed by '<station_id>_<FUEL TYPE>' (upper-cased fuel type).

        A row carrying any price replaces an earlier row without one.
        """
        if not fuel_types:
            return {}
        wanted = {ft.upper() for ft in fuel_types}
        results = await self._gather_chunks(
            station_ids, self._price_repository.find_doe_prices, "DOE"
        )
        prices: dict[str, DoePrice] = {}
        for rows in results:
            for row in rows:
                if row.fuel_type.upper() not in wanted:
                    continue
                key = f"{row.gas_station_id}_{row.fuel_type.upper()}"
                current = prices.get(key)
                if current is None or (row.has_price and not current.has_price):
                    prices[key] = row
        return prices


def create_price_points(
    stations: list[GasStation],
    community: dict[str, CommunityPrice],
    doe: dict[str, DoePrice],
    fuel_types: list[str],
) -> list[PricePoint]:
    """One point per station and fuel type that has a community or DOE price."""
    points: list[PricePoint] = []
    for station in stations:
        for fuel_type in fuel_types:
            community_price = community.get(f"{station.id}_{fuel_type}")
            doe_price = doe.get(f"{station.id}_{fuel_type.upper()}")
            if community_price is None and doe_price is None:
                continue
            points.append(
                PricePoint(
                    station=station,
                    fuel_type=fuel_type,
                    community_price=community_price,
                    doe_price=doe_price,
                )
            )
    return points
