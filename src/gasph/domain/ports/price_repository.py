"""Price repository port."""

from typing import Protocol

from gasph.domain.models.price import CommunityPrice, DoePrice, UserContribution


class PriceRepository(Protocol):
    """Port for community and DOE prices, reports and confirmations."""

    async def find_community_prices(
        self, station_ids: list[str], fuel_type: str | None = None
    ) -> list[CommunityPrice]:
        """Active community prices for the given stations."""
        ...

    async def find_doe_prices(self, station_ids: list[str]) -> list[DoePrice]:
        """DOE reference prices for the given stations."""
        ...

    async def find_station_prices(self, station_id: str) -> list[CommunityPrice]:
        """Active community prices for one station, newest first."""
        ...

    async def insert_price_report(
        self, station_id: str, fuel_type: str, price: float, user_id: str, cycle_id: str
    ) -> None:
        """Store a new community price report."""
        ...

    async def confirm_price(self, report_id: str, user_id: str) -> object:
        """Record the user's confirmation of a price report."""
        ...

    async def confirmed_report_ids(self, user_id: str, report_ids: list[str]) -> set[str]:
        """Subset of report_ids the user has confirmed."""
        ...

    async def find_user_contributions(self, user_id: str, limit: int) -> list[UserContribution]:
        """The user's own price reports, newest first."""
        ...
