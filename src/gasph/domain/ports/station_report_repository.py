"""Station report repository port."""

from datetime import datetime
from typing import Any, Protocol

from gasph.domain.models.station_report import ReportStatus, ReportType, StationReport


class StationReportRepository(Protocol):
    """Port for user reports about stations."""

    async def insert(
        self,
        station_id: str,
        user_id: str,
        report_type: ReportType,
        reason: str,
        reported_data: dict[str, Any] | None,
    ) -> None:
        """Store a pending report."""
        ...

    async def list_by_status(self, status: ReportStatus) -> list[StationReport]:
        """Reports in the given status, oldest first."""
        ...

    async def update_status(
        self, report_id: str, status: ReportStatus, resolver_id: str, resolved_at: datetime
    ) -> None:
        """Resolve a report."""
        ...
