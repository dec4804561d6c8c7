"""Favorite stations service."""

import logging
import math

from gasph.domain.errors import BackendError, FavoriteLimitError
from gasph.domain.geo import distance
from gasph.domain.models.coordinate import Coordinate
from gasph.domain.models.price import CommunityPrice, FavoriteStationPrice
from gasph.domain.ports.favorite_repository import FavoriteRepository
from gasph.domain.ports.price_repository import PriceRepository
from gasph.domain.ports.profile_repository import ProfileRepository
from gasph.domain.ports.station_repository import StationRepository

logger = logging.getLogger(__name__)


def _by_distance(item: FavoriteStationPrice) -> float:
    return item.distance if item.distance is not None else math.inf


class FavoriteStationService:
    """Manages favorites and the prices of the user's preferred fuel at them."""

    def __init__(
        self,
        favorite_repository: FavoriteRepository,
        station_repository: StationRepository,
        price_repository: PriceRepository,
        profile_repository: ProfileRepository,
        free_favorites_limit: int = 1,
    ) -> None:
        self._favorite_repository = favorite_repository
        self._station_repository = station_repository
        self._price_repository = price_repository
        self._profile_repository = profile_repository
        self._free_favorites_limit = free_favorites_limit

    async def list_favorite_ids(self, user_id: str) -> list[str]:
        return await self._favorite_repository.list_station_ids(user_id)

    async def add_favorite(self, user_id: str, station_id: str) -> None:
        """Add a favorite, enforcing the limit for users without a pro plan.

        Raises:
            FavoriteLimitError: If a free user already holds the maximum.
        """
        current = await self._favorite_repository.list_station_ids(user_id)
        if station_id in current:
            logger.debug(f"Station {station_id} already a favorite of {user_id}")
            return

        profile = await self._profile_repository.find_by_id(user_id)
        is_pro = profile.is_pro if profile else False
        if not is_pro and len(current) >= self._free_favorites_limit:
            raise FavoriteLimitError()

        await self._favorite_repository.add(user_id, station_id)
        logger.info(f"Added favorite station {station_id}")

    async def remove_favorite(self, user_id: str, station_id: str) -> None:
        await self._favorite_repository.remove(user_id, station_id)
        logger.info(f"Removed favorite station {station_id}")

    async def get_favorite_prices(
        self,
        user_id: str | None,
        fuel_type: str | None,
        location: Coordinate | None,
    ) -> list[FavoriteStationPrice]:
        """Favorite stations with their cheapest price of fuel_type, nearest first.

        Uses the server-side aggregation and falls back to aggregating on the
        client when the backend function is unavailable.
        """
        if not user_id or not fuel_type or location is None:
            return []

        try:
            prices = await self._favorite_repository.favorite_prices(
                user_id, fuel_type, location.latitude, location.longitude
            )
        except BackendError as e:
            logger.warning(f"Favorite price aggregation failed, aggregating locally: {e}")
            prices = await self._aggregate_favorite_prices(user_id, fuel_type, location)

        return sorted(prices, key=_by_distance)

    async def _aggregate_favorite_prices(
        self, user_id: str, fuel_type: str, location: Coordinate
    ) -> list[FavoriteStationPrice]:
        station_ids = await self._favorite_repository.list_station_ids(user_id)
        if not station_ids:
            return []

        stations = await self._station_repository.find_by_ids(station_ids)
        reports = await self._price_repository.find_community_prices(station_ids, fuel_type)

        cheapest: dict[str, CommunityPrice] = {}
        for report in reports:
            current = cheapest.get(report.station_id)
            if current is None or report.price < current.price:
                cheapest[report.station_id] = report

        result: list[FavoriteStationPrice] = []
        for station in stations:
            best = cheapest.get(station.id)
            station_distance = distance(location, station.coordinate)
            result.append(
                FavoriteStationPrice(
                    id=station.id,
                    name=station.name,
                    brand=station.brand,
                    city=station.city,
                    latitude=station.latitude,
                    longitude=station.longitude,
                    distance=None if math.isnan(station_distance) else station_distance,
                    fuel_type=fuel_type,
                    price=best.price if best else None,
                    confirmations_count=best.confirmations_count if best else None,
                )
            )
        return result
