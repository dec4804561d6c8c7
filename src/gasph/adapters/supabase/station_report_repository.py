"""Supabase station report repository adapter."""

from datetime import datetime
from typing import Any

from gasph.adapters.supabase.constants import (
    DUPLICATE_PENDING_REPORT_MESSAGE,
    STATION_REPORT_COLUMNS,
    STATION_REPORTS_TABLE,
)
from gasph.adapters.supabase.http_client import SupabaseClient
from gasph.adapters.supabase.query import Query
from gasph.adapters.supabase.row_parser import parse_rows
from gasph.domain.errors import BackendError, DuplicateReportError
from gasph.domain.models.station_report import ReportStatus, ReportType, StationReport
from gasph.domain.ports.station_report_repository import StationReportRepository


class SupabaseStationReportRepository(StationReportRepository):
    """User station reports stored in station_reports."""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    async def insert(
        self,
        station_id: str,
        user_id: str,
        report_type: ReportType,
        reason: str,
        reported_data: dict[str, Any] | None,
    ) -> None:
        try:
            await self._client.insert(
                STATION_REPORTS_TABLE,
                {
                    "station_id": station_id,
                    "user_id": user_id,
                    "report_type": report_type,
                    "reason": reason,
                    "reported_data": reported_data,
                    "latitude": None,
                    "longitude": None,
                    "status": "pending",
                },
            )
        except BackendError as e:
            if DUPLICATE_PENDING_REPORT_MESSAGE in str(e):
                raise DuplicateReportError() from e
            raise

    async def list_by_status(self, status: ReportStatus) -> list[StationReport]:
        rows = await self._client.select(
            Query(STATION_REPORTS_TABLE, columns=STATION_REPORT_COLUMNS)
            .eq("status", status)
            .order("created_at", ascending=True)
        )
        for row in rows:
            profile = row.pop("profile", None)
            if isinstance(profile, dict):
                row["reporter_username"] = profile.get("username")
        return parse_rows(StationReport, rows)

    async def update_status(
        self, report_id: str, status: ReportStatus, resolver_id: str, resolved_at: datetime
    ) -> None:
        await self._client.update(
            Query(STATION_REPORTS_TABLE).eq("id", report_id),
            {
                "status": status,
                "resolved_at": resolved_at.isoformat(),
                "resolver_id": resolver_id,
            },
        )
