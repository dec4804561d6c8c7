"""Tests for the admin statistics service."""

from datetime import UTC, datetime

import pytest

from gasph.application.services.admin_stats_service import AdminStatsService
from gasph.domain.models.price_cycle import PriceCycle
from gasph.domain.models.user_profile import UserProfile
from tests.fakes import (
    FakePriceCycleRepository,
    FakeProfileRepository,
    FakeStationRepository,
    make_station,
)


@pytest.mark.asyncio
async def test_admin_stats_collects_counters() -> None:
    """Given stations, cycles and users, when collecting stats, then all counters are filled."""
    stations = FakeStationRepository([make_station("s1", 14.6, 121.0), make_station("s2", 14.7, 121.1)])
    stations.latest = datetime(2025, 3, 1, tzinfo=UTC)
    cycles = FakePriceCycleRepository(
        [
            PriceCycle(
                id="c1",
                cycle_number=1,
                start_date=datetime(2025, 3, 1, tzinfo=UTC),
                end_date=datetime(2025, 3, 8, tzinfo=UTC),
                status="active",
            )
        ]
    )
    profiles = FakeProfileRepository([UserProfile(id="u1"), UserProfile(id="u2"), UserProfile(id="u3")])

    stats = await AdminStatsService(stations, cycles, profiles).get_admin_stats()

    assert stats.stations_count == 2
    assert stats.active_cycles_count == 1
    assert stats.users_count == 3
    assert stats.last_import_date == datetime(2025, 3, 1, tzinfo=UTC)


@pytest.mark.asyncio
async def test_admin_stats_without_imports() -> None:
    """Given an empty backend, when collecting stats, then counts are zero and no import date is set."""
    stats = await AdminStatsService(
        FakeStationRepository(), FakePriceCycleRepository(), FakeProfileRepository()
    ).get_admin_stats()

    assert stats.stations_count == 0
    assert stats.last_import_date is None
