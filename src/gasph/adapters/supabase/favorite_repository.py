"""Supabase favorite station repository adapter."""

from gasph.adapters.supabase.constants import FAVORITE_STATION_PRICES_RPC, USER_FAVORITES_TABLE
from gasph.adapters.supabase.http_client import SupabaseClient
from gasph.adapters.supabase.query import Query
from gasph.adapters.supabase.row_parser import parse_rows
from gasph.domain.models.price import FavoriteStationPrice
from gasph.domain.ports.favorite_repository import FavoriteRepository


class SupabaseFavoriteRepository(FavoriteRepository):
    """Favorites stored in user_favorites, aggregated prices via RPC."""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    async def list_station_ids(self, user_id: str) -> list[str]:
        rows = await self._client.select(
            Query(USER_FAVORITES_TABLE, columns="station_id").eq("user_id", user_id)
        )
        return [str(row["station_id"]) for row in rows if row.get("station_id")]

    async def add(self, user_id: str, station_id: str) -> None:
        await self._client.insert(
            USER_FAVORITES_TABLE, {"user_id": user_id, "station_id": station_id}
        )

    async def remove(self, user_id: str, station_id: str) -> None:
        await self._client.delete(
            Query(USER_FAVORITES_TABLE).eq("user_id", user_id).eq("station_id", station_id)
        )

    async def favorite_prices(
        self, user_id: str, fuel_type: str, latitude: float, longitude: float
    ) -> list[FavoriteStationPrice]:
        rows = await self._client.rpc(
            FAVORITE_STATION_PRICES_RPC,
            {
                "p_user_id": user_id,
                "p_fuel_type": fuel_type,
                "p_user_lat": latitude,
                "p_user_lon": longitude,
            },
        )
        return parse_rows(FavoriteStationPrice, rows or [])
