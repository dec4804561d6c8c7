"""Supabase station repository adapter."""

import logging
from datetime import datetime

from gasph.adapters.supabase.constants import GAS_STATIONS_TABLE
from gasph.adapters.supabase.http_client import SupabaseClient
from gasph.adapters.supabase.query import Query
from gasph.adapters.supabase.row_parser import parse_row, parse_rows
from gasph.domain.models.coordinate import BoundingBox
from gasph.domain.models.gas_station import GasStation
from gasph.domain.ports.station_repository import StationRepository

logger = logging.getLogger(__name__)


class SupabaseStationRepository(StationRepository):
    """Reads gas stations from the gas_stations table."""

    def __init__(self, client: SupabaseClient, chunk_size: int = 100) -> None:
        self._client = client
        self._chunk_size = chunk_size

    async def find_in_bounding_box(
        self, box: BoundingBox, limit: int | None = None
    ) -> list[GasStation]:
        query = (
            Query(GAS_STATIONS_TABLE)
            .eq("status", "active")
            .gte("latitude", box.min_lat)
            .lte("latitude", box.max_lat)
            .gte("longitude", box.min_lng)
            .lte("longitude", box.max_lng)
        )
        if limit is not None:
            query.limit(limit)
        rows = await self._client.select(query)
        logger.debug(f"Bounding box query returned {len(rows)} station(s)")
        return parse_rows(GasStation, rows)

    async def find_by_id(self, station_id: str) -> GasStation | None:
        row = await self._client.select_one(Query(GAS_STATIONS_TABLE).eq("id", station_id))
        return parse_row(GasStation, row)

    async def find_by_ids(self, station_ids: list[str]) -> list[GasStation]:
        stations: list[GasStation] = []
        for start in range(0, len(station_ids), self._chunk_size):
            chunk = station_ids[start : start + self._chunk_size]
            rows = await self._client.select(Query(GAS_STATIONS_TABLE).in_("id", chunk))
            stations.extend(parse_rows(GasStation, rows))
        return stations

    async def list_active(self) -> list[GasStation]:
        rows = await self._client.select(Query(GAS_STATIONS_TABLE).eq("status", "active"))
        return parse_rows(GasStation, rows)

    async def count(self) -> int:
        return await self._client.count(Query(GAS_STATIONS_TABLE))

    async def latest_created_at(self) -> datetime | None:
        row = await self._client.select_one(
            Query(GAS_STATIONS_TABLE, columns="created_at")
            .order("created_at", ascending=False)
            .limit(1)
        )
        if not row or not row.get("created_at"):
            return None
        return datetime.fromisoformat(row["created_at"])
