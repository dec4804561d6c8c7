"""Station report domain model."""

from datetime import datetime
from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

ReportType = Literal["add", "update", "delete"]
ReportStatus = Literal["pending", "approved", "rejected"]


class ReportReason(StrEnum):
    """Reasons a user can give when reporting a station."""

    DOES_NOT_EXIST = "Doesn't Exist"
    PERMANENTLY_CLOSED = "Permanently Closed"
    INCORRECT_INFO = "Incorrect Info"


class StationReport(BaseModel):
    """A user report asking admins to add, update or delete a station."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    station_id: str | None = None
    user_id: str
    report_type: ReportType
    reason: str | None = None
    reported_data: dict[str, Any] | None = None
    latitude: float | None = None
    longitude: float | None = None
    status: ReportStatus = "pending"
    created_at: datetime | None = None
    resolved_at: datetime | None = None
    resolver_id: str | None = None
    reporter_username: str | None = None
