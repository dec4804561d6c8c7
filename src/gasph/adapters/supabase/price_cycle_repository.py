"""Supabase price cycle repository adapter."""

from datetime import datetime
from typing import Any

from gasph.adapters.supabase.constants import PRICE_REPORTING_CYCLES_TABLE
from gasph.adapters.supabase.http_client import SupabaseClient
from gasph.adapters.supabase.query import Query
from gasph.adapters.supabase.row_parser import parse_row, parse_rows
from gasph.domain.errors import BackendError
from gasph.domain.models.error_details import ErrorDetails
from gasph.domain.models.price_cycle import CycleStatus, PriceCycle
from gasph.domain.ports.price_cycle_repository import PriceCycleRepository


class SupabasePriceCycleRepository(PriceCycleRepository):
    """Price reporting cycles stored in price_reporting_cycles."""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    async def list_cycles(self, include_archived: bool = False) -> list[PriceCycle]:
        query = Query(PRICE_REPORTING_CYCLES_TABLE).order("cycle_number", ascending=False)
        if not include_archived:
            query.neq("status", "archived")
        return parse_rows(PriceCycle, await self._client.select(query))

    async def find_active(self) -> PriceCycle | None:
        row = await self._client.select_one(
            Query(PRICE_REPORTING_CYCLES_TABLE)
            .eq("status", "active")
            .order("cycle_number", ascending=False)
            .limit(1)
        )
        return parse_row(PriceCycle, row)

    async def latest_cycle_number(self) -> int | None:
        row = await self._client.select_one(
            Query(PRICE_REPORTING_CYCLES_TABLE, columns="cycle_number")
            .order("cycle_number", ascending=False)
            .limit(1)
        )
        if not row or row.get("cycle_number") is None:
            return None
        return int(row["cycle_number"])

    async def create(
        self, cycle_number: int, start_date: datetime, end_date: datetime
    ) -> PriceCycle:
        rows = await self._client.insert(
            PRICE_REPORTING_CYCLES_TABLE,
            {
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "is_active": True,
                "status": "active",
                "cycle_number": cycle_number,
            },
            returning=True,
        )
        cycle = parse_row(PriceCycle, rows[0] if rows else None)
        if cycle is None:
            raise BackendError(ErrorDetails(reason="Backend did not return the created cycle"))
        return cycle

    async def set_status(self, cycle_id: str, status: CycleStatus) -> None:
        values: dict[str, Any] = {"status": status}
        if status == "active":
            values["is_active"] = True
        await self._client.update(Query(PRICE_REPORTING_CYCLES_TABLE).eq("id", cycle_id), values)

    async def count_active(self) -> int:
        return await self._client.count(
            Query(PRICE_REPORTING_CYCLES_TABLE).eq("status", "active")
        )
