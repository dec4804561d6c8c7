"""Price reporting cycle administration."""

import logging
from datetime import datetime

from gasph.domain.models.price_cycle import PriceCycle
from gasph.domain.ports.price_cycle_repository import PriceCycleRepository

logger = logging.getLogger(__name__)


class PriceCycleService:
    """Lists, creates, archives and activates price reporting cycles."""

    def __init__(self, cycle_repository: PriceCycleRepository) -> None:
        self._cycle_repository = cycle_repository

    async def list_cycles(self, include_archived: bool = False) -> list[PriceCycle]:
        return await self._cycle_repository.list_cycles(include_archived)

    async def get_active_cycle(self) -> PriceCycle | None:
        return await self._cycle_repository.find_active()

    async def get_next_cycle_number(self) -> int:
        latest = await self._cycle_repository.latest_cycle_number()
        return (latest or 0) + 1

    async def create_cycle(self, start_date: datetime, end_date: datetime) -> PriceCycle:
        """Create an active cycle with the next cycle number.

        Raises:
            ValueError: If end_date is not after start_date.
        """
        if end_date <= start_date:
            raise ValueError("End date must be after start date")

        cycle_number = await self.get_next_cycle_number()
        cycle = await self._cycle_repository.create(cycle_number, start_date, end_date)
        logger.info(f"Created price cycle #{cycle.cycle_number}")
        return cycle

    async def archive_cycle(self, cycle_id: str) -> None:
        await self._cycle_repository.set_status(cycle_id, "archived")
        logger.info(f"Archived price cycle {cycle_id}")

    async def activate_cycle(self, cycle_id: str) -> None:
        await self._cycle_repository.set_status(cycle_id, "active")
        logger.info(f"Activated price cycle {cycle_id}")
