"""Station report service."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from gasph.domain.errors import NotAuthenticatedError
from gasph.domain.models.station_report import (
    ReportReason,
    ReportStatus,
    ReportType,
    StationReport,
)
from gasph.domain.ports.station_report_repository import StationReportRepository

logger = logging.getLogger(__name__)

RESOLUTION_STATUSES: tuple[ReportStatus, ...] = ("approved", "rejected")


def report_type_for(reason: ReportReason) -> ReportType:
    """Closed or missing stations are deletion requests; wrong info is an update."""
    if reason == ReportReason.INCORRECT_INFO:
        return "update"
    return "delete"


class StationReportService:
    """Lets users flag stations and admins resolve the flags."""

    def __init__(
        self,
        report_repository: StationReportRepository,
        current_user_id: Callable[[], str | None],
    ) -> None:
        self._report_repository = report_repository
        self._current_user_id = current_user_id

    def _require_user(self) -> str:
        user_id = self._current_user_id()
        if not user_id:
            raise NotAuthenticatedError()
        return user_id

    async def submit_report(
        self, station_id: str, reason: ReportReason | str, comment: str | None = None
    ) -> None:
        """Submit a pending report about a station.

        Raises:
            ValueError: If reason is not a known report reason.
            DuplicateReportError: If the user already has a pending report.
        """
        user_id = self._require_user()
        report_reason = ReportReason(reason)
        report_type = report_type_for(report_reason)

        reported_data: dict[str, Any] | None = None
        if report_type == "update":
            reported_data = {"comment": comment or ""}

        await self._report_repository.insert(
            station_id, user_id, report_type, str(report_reason), reported_data
        )
        logger.info(f"Submitted {report_type} report for station {station_id}")

    async def list_pending_reports(self) -> list[StationReport]:
        return await self._report_repository.list_by_status("pending")

    async def resolve_report(self, report_id: str, status: ReportStatus) -> None:
        if status not in RESOLUTION_STATUSES:
            raise ValueError(f"Report can only be approved or rejected, got {status!r}")
        resolver_id = self._require_user()
        await self._report_repository.update_status(
            report_id, status, resolver_id, datetime.now(UTC)
        )
        logger.info(f"Report {report_id} {status}")
