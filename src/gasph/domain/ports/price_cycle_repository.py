"""Price cycle repository port."""

from datetime import datetime
from typing import Protocol

from gasph.domain.models.price_cycle import CycleStatus, PriceCycle


class PriceCycleRepository(Protocol):
    """Port for price reporting cycles."""

    async def list_cycles(self, include_archived: bool = False) -> list[PriceCycle]:
        """Cycles ordered by cycle number, newest first."""
        ...

    async def find_active(self) -> PriceCycle | None:
        """The currently active cycle, if any."""
        ...

    async def latest_cycle_number(self) -> int | None:
        """Highest cycle number in use."""
        ...

    async def create(self, cycle_number: int, start_date: datetime, end_date: datetime) -> PriceCycle:
        """Create an active cycle."""
        ...

    async def set_status(self, cycle_id: str, status: CycleStatus) -> None:
        """Change a cycle's status."""
        ...

    async def count_active(self) -> int:
        """Number of active cycles."""
        ...
