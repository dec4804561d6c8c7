"""Admin dashboard statistics."""

import asyncio

from gasph.domain.models.user_profile import AdminStats
from gasph.domain.ports.price_cycle_repository import PriceCycleRepository
from gasph.domain.ports.profile_repository import ProfileRepository
from gasph.domain.ports.station_repository import StationRepository


class AdminStatsService:
    """Collects the admin dashboard counters concurrently."""

    def __init__(
        self,
        station_repository: StationRepository,
        cycle_repository: PriceCycleRepository,
        profile_repository: ProfileRepository,
    ) -> None:
        self._station_repository = station_repository
        self._cycle_repository = cycle_repository
        self._profile_repository = profile_repository

    async def get_admin_stats(self) -> AdminStats:
        stations_count, active_cycles_count, users_count, last_import = await asyncio.gather(
            self._station_repository.count(),
            self._cycle_repository.count_active(),
            self._profile_repository.count(),
            self._station_repository.latest_created_at(),
        )
        return AdminStats(
            stations_count=stations_count,
            active_cycles_count=active_cycles_count,
            users_count=users_count,
            last_import_date=last_import,
        )
