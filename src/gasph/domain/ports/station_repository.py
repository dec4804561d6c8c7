"""Station repository port."""

from datetime import datetime
from typing import Protocol

from gasph.domain.models.coordinate import BoundingBox
from gasph.domain.models.gas_station import GasStation


class StationRepository(Protocol):
    """Port for reading gas stations from the backend."""

    async def find_in_bounding_box(
        self, box: BoundingBox, limit: int | None = None
    ) -> list[GasStation]:
        """Find active stations whose coordinates fall inside the box."""
        ...

    async def find_by_id(self, station_id: str) -> GasStation | None:
        """Find a station by its identifier."""
        ...

    async def find_by_ids(self, station_ids: list[str]) -> list[GasStation]:
        """Find all stations with the given identifiers."""
        ...

    async def list_active(self) -> list[GasStation]:
        """List every active station."""
        ...

    async def count(self) -> int:
        """Count all stations."""
        ...

    async def latest_created_at(self) -> datetime | None:
        """Creation time of the most recently imported station."""
        ...
