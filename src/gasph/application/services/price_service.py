"""Community price reporting service."""

import logging
import math
from collections.abc import Callable

from gasph.domain.errors import InvalidPriceError, NoActiveCycleError, NotAuthenticatedError
from gasph.domain.models.price import EnhancedPriceReport, StationDetails, UserContribution
from gasph.domain.ports.price_cycle_repository import PriceCycleRepository
from gasph.domain.ports.price_repository import PriceRepository
from gasph.domain.ports.station_repository import StationRepository

logger = logging.getLogger(__name__)


def parse_price(value: float | str) -> float:
    """Parse a user-entered price.

    Raises:
        InvalidPriceError: If the value is not a finite positive number.
    """
    try:
        price = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidPriceError(f"Invalid price: {value!r}") from e
    if not math.isfinite(price) or price <= 0:
        raise InvalidPriceError(f"Price must be a positive number, got {value!r}")
    return price


class PriceService:
    """Reports, confirmations and per-station price listings."""

    def __init__(
        self,
        price_repository: PriceRepository,
        cycle_repository: PriceCycleRepository,
        station_repository: StationRepository,
        current_user_id: Callable[[], str | None],
    ) -> None:
        """Initialize the service.

        Args:
            price_repository: Community and DOE price storage.
            cycle_repository: Price reporting cycles.
            station_repository: Station lookup for detail views.
            current_user_id: Returns the signed-in user's id, or None.
        """
        self._price_repository = price_repository
        self._cycle_repository = cycle_repository
        self._station_repository = station_repository
        self._current_user_id = current_user_id

    def _require_user(self) -> str:
        user_id = self._current_user_id()
        if not user_id:
            raise NotAuthenticatedError()
        return user_id

    async def report_price(self, station_id: str, fuel_type: str, price: float | str) -> None:
        """Submit a price report for the active cycle."""
        user_id = self._require_user()
        value = parse_price(price)

        cycle = await self._cycle_repository.find_active()
        if cycle is None:
            raise NoActiveCycleError()

        await self._price_repository.insert_price_report(
            station_id, fuel_type, value, user_id, cycle.id
        )

    async def confirm_price(self, report_id: str) -> object:
        user_id = self._require_user()
        result = await self._price_repository.confirm_price(report_id, user_id)
        logger.info(f"Confirmed price report {report_id}")
        return result

    async def has_confirmed(self, report_id: str) -> bool:
        user_id = self._current_user_id()
        if not user_id:
            return False
        confirmed = await self._price_repository.confirmed_report_ids(user_id, [report_id])
        return report_id in confirmed

    async def get_station_details(self, station_id: str) -> StationDetails | None:
        """Station with its active reports, newest first, flagged for the viewer."""
        station = await self._station_repository.find_by_id(station_id)
        if station is None:
            return None

        reports = await self._price_repository.find_station_prices(station_id)
        doe_prices = await self._price_repository.find_doe_prices([station_id])

        user_id = self._current_user_id()
        confirmed: set[str] = set()
        if user_id and reports:
            confirmed = await self._price_repository.confirmed_report_ids(
                user_id, [r.id for r in reports]
            )

        enhanced = [
            EnhancedPriceReport(
                **report.model_dump(),
                is_own_report=bool(user_id) and report.user_id == user_id,
                user_has_confirmed=report.id in confirmed,
            )
            for report in reports
        ]
        return StationDetails(station=station, community_prices=enhanced, doe_prices=doe_prices)

    async def get_user_contributions(self, limit: int = 10) -> list[UserContribution]:
        user_id = self._require_user()
        return await self._price_repository.find_user_contributions(user_id, limit)
