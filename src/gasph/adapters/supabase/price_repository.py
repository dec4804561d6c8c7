"""Supabase price repository adapter."""

import logging

from gasph.adapters.supabase.constants import (
    ACTIVE_PRICE_REPORTS_VIEW,
    COMMUNITY_PRICE_COLUMNS,
    CONFIRM_PRICE_REPORT_RPC,
    DOE_PRICE_COLUMNS,
    DOE_PRICE_VIEW,
    PRICE_CONFIRMATIONS_TABLE,
    USER_CONTRIBUTION_COLUMNS,
    USER_PRICE_REPORTS_TABLE,
)
from gasph.adapters.supabase.http_client import SupabaseClient
from gasph.adapters.supabase.query import Query
from gasph.adapters.supabase.row_parser import parse_rows
from gasph.domain.models.price import CommunityPrice, DoePrice, UserContribution
from gasph.domain.ports.price_repository import PriceRepository

logger = logging.getLogger(__name__)


class SupabasePriceRepository(PriceRepository):
    """Community prices, DOE prices, price reports and confirmations."""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    async def find_community_prices(
        self, station_ids: list[str], fuel_type: str | None = None
    ) -> list[CommunityPrice]:
        if not station_ids:
            return []
        query = Query(ACTIVE_PRICE_REPORTS_VIEW, columns=COMMUNITY_PRICE_COLUMNS).in_(
            "station_id", station_ids
        )
        if fuel_type:
            query.eq("fuel_type", fuel_type)
        rows = await self._client.select(query)
        return parse_rows(CommunityPrice, rows)

    async def find_doe_prices(self, station_ids: list[str]) -> list[DoePrice]:
        if not station_ids:
            return []
        rows = await self._client.select(
            Query(DOE_PRICE_VIEW, columns=DOE_PRICE_COLUMNS).in_("gas_station_id", station_ids)
        )
        # The view can emit rows without a station or fuel type; they cannot be matched
        rows = [r for r in rows if r.get("gas_station_id") and r.get("fuel_type")]
        return parse_rows(DoePrice, rows)

    async def find_station_prices(self, station_id: str) -> list[CommunityPrice]:
        rows = await self._client.select(
            Query(ACTIVE_PRICE_REPORTS_VIEW)
            .eq("station_id", station_id)
            .order("reported_at", ascending=False)
        )
        return parse_rows(CommunityPrice, rows)

    async def insert_price_report(
        self, station_id: str, fuel_type: str, price: float, user_id: str, cycle_id: str
    ) -> None:
        await self._client.insert(
            USER_PRICE_REPORTS_TABLE,
            {
                "station_id": station_id,
                "fuel_type": fuel_type,
                "price": price,
                "user_id": user_id,
                "cycle_id": cycle_id,
            },
        )
        logger.info(f"Reported {fuel_type} at {price} for station {station_id}")

    async def confirm_price(self, report_id: str, user_id: str) -> object:
        return await self._client.rpc(
            CONFIRM_PRICE_REPORT_RPC, {"p_report_id": report_id, "p_user_id": user_id}
        )

    async def confirmed_report_ids(self, user_id: str, report_ids: list[str]) -> set[str]:
        if not report_ids:
            return set()
        rows = await self._client.select(
            Query(PRICE_CONFIRMATIONS_TABLE, columns="report_id")
            .eq("user_id", user_id)
            .in_("report_id", report_ids)
        )
        return {str(row["report_id"]) for row in rows if row.get("report_id")}

    async def find_user_contributions(self, user_id: str, limit: int) -> list[UserContribution]:
        rows = await self._client.select(
            Query(USER_PRICE_REPORTS_TABLE, columns=USER_CONTRIBUTION_COLUMNS)
            .eq("user_id", user_id)
            .order("reported_at", ascending=False)
            .limit(limit)
        )
        return parse_rows(UserContribution, rows)
