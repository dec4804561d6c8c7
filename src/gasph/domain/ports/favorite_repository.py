"""Favorite station repository port."""

from typing import Protocol

from gasph.domain.models.price import FavoriteStationPrice


class FavoriteRepository(Protocol):
    """Port for the user's favorite stations."""

    async def list_station_ids(self, user_id: str) -> list[str]:
        """Identifiers of the user's favorite stations."""
        ...

    async def add(self, user_id: str, station_id: str) -> None:
        """Mark a station as favorite."""
        ...

    async def remove(self, user_id: str, station_id: str) -> None:
        """Unmark a favorite station."""
        ...

    async def favorite_prices(
        self, user_id: str, fuel_type: str, latitude: float, longitude: float
    ) -> list[FavoriteStationPrice]:
        """Server-side aggregated favorite prices, sorted by distance."""
        ...
