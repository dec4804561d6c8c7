"""Price reporting cycle domain model."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

CycleStatus = Literal["active", "completed", "archived"]


class PriceCycle(BaseModel):
    """A period during which community price reports are collected."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    cycle_number: int
    start_date: datetime
    end_date: datetime
    status: CycleStatus
    is_active: bool | None = None
    doe_import_date: datetime | None = None
    created_at: datetime | None = None
