"""In-memory repositories and builders shared by service tests."""

from datetime import datetime
from typing import Any

from gasph.domain.errors import BackendError
from gasph.domain.models.coordinate import BoundingBox
from gasph.domain.models.error_details import ErrorDetails
from gasph.domain.models.gas_station import GasStation
from gasph.domain.models.price import (
    CommunityPrice,
    DoePrice,
    FavoriteStationPrice,
    UserContribution,
)
from gasph.domain.models.price_cycle import CycleStatus, PriceCycle
from gasph.domain.models.station_report import ReportStatus, ReportType, StationReport
from gasph.domain.models.user_profile import UserProfile


def make_station(station_id: str, latitude: float, longitude: float, **extra: Any) -> GasStation:
    return GasStation(
        id=station_id,
        name=extra.pop("name", f"Station {station_id}"),
        latitude=latitude,
        longitude=longitude,
        **extra,
    )


def make_community_price(
    report_id: str, station_id: str, fuel_type: str, price: float, **extra: Any
) -> CommunityPrice:
    return CommunityPrice(
        id=report_id, station_id=station_id, fuel_type=fuel_type, price=price, **extra
    )


def make_doe_price(station_id: str, fuel_type: str, **prices: Any) -> DoePrice:
    return DoePrice(gas_station_id=station_id, fuel_type=fuel_type, **prices)


class FakeStationRepository:
    """Station repository backed by a list."""

    def __init__(self, stations: list[GasStation] | None = None) -> None:
        self.stations = stations or []
        self.box_queries: list[tuple[BoundingBox, int | None]] = []
        self.latest: datetime | None = None

    async def find_in_bounding_box(
        self, box: BoundingBox, limit: int | None = None
    ) -> list[GasStation]:
        self.box_queries.append((box, limit))
        found = [s for s in self.stations if box.contains(s.coordinate)]
        return found[:limit] if limit else found

    async def find_by_id(self, station_id: str) -> GasStation | None:
        return next((s for s in self.stations if s.id == station_id), None)

    async def find_by_ids(self, station_ids: list[str]) -> list[GasStation]:
        return [s for s in self.stations if s.id in station_ids]

    async def list_active(self) -> list[GasStation]:
        return [s for s in self.stations if s.status == "active"]

    async def count(self) -> int:
        return len(self.stations)

    async def latest_created_at(self) -> datetime | None:
        return self.latest


class FakePriceRepository:
    """Price repository backed by lists; chunk calls are recorded."""

    def __init__(
        self,
        community: list[CommunityPrice] | None = None,
        doe: list[DoePrice] | None = None,
    ) -> None:
        self.community = community or []
        self.doe = doe or []
        self.community_calls: list[list[str]] = []
        self.doe_calls: list[list[str]] = []
        self.failing_chunk_ids: set[str] = set()
        self.reports: list[dict[str, Any]] = []
        self.confirmations: set[tuple[str, str]] = set()
        self.contributions: list[UserContribution] = []

    def _maybe_fail(self, station_ids: list[str]) -> None:
        if self.failing_chunk_ids & set(station_ids):
            raise BackendError(ErrorDetails(status_code=500, reason="chunk failed"))

    async def find_community_prices(
        self, station_ids: list[str], fuel_type: str | None = None
    ) -> list[CommunityPrice]:
        self.community_calls.append(list(station_ids))
        self._maybe_fail(station_ids)
        return [
            p
            for p in self.community
            if p.station_id in station_ids and (fuel_type is None or p.fuel_type == fuel_type)
        ]

    async def find_doe_prices(self, station_ids: list[str]) -> list[DoePrice]:
        self.doe_calls.append(list(station_ids))
        self._maybe_fail(station_ids)
        return [p for p in self.doe if p.gas_station_id in station_ids]

    async def find_station_prices(self, station_id: str) -> list[CommunityPrice]:
        return [p for p in self.community if p.station_id == station_id]

    async def insert_price_report(
        self, station_id: str, fuel_type: str, price: float, user_id: str, cycle_id: str
    ) -> None:
        self.reports.append(
            {
                "station_id": station_id,
                "fuel_type": fuel_type,
                "price": price,
                "user_id": user_id,
                "cycle_id": cycle_id,
            }
        )

    async def confirm_price(self, report_id: str, user_id: str) -> object:
        self.confirmations.add((user_id, report_id))
        return True

    async def confirmed_report_ids(self, user_id: str, report_ids: list[str]) -> set[str]:
        return {rid for uid, rid in self.confirmations if uid == user_id and rid in report_ids}

    async def find_user_contributions(self, user_id: str, limit: int) -> list[UserContribution]:
        return self.contributions[:limit]


class FakeFavoriteRepository:
    """Favorites kept per user; the aggregation RPC can be made to fail."""

    def __init__(self) -> None:
        self.favorites: dict[str, list[str]] = {}
        self.rpc_result: list[FavoriteStationPrice] = []
        self.rpc_error: BackendError | None = None
        self.rpc_calls: list[tuple[str, str, float, float]] = []

    async def list_station_ids(self, user_id: str) -> list[str]:
        return list(self.favorites.get(user_id, []))

    async def add(self, user_id: str, station_id: str) -> None:
        self.favorites.setdefault(user_id, []).append(station_id)

    async def remove(self, user_id: str, station_id: str) -> None:
        if station_id in self.favorites.get(user_id, []):
            self.favorites[user_id].remove(station_id)

    async def favorite_prices(
        self, user_id: str, fuel_type: str, latitude: float, longitude: float
    ) -> list[FavoriteStationPrice]:
        self.rpc_calls.append((user_id, fuel_type, latitude, longitude))
        if self.rpc_error is not None:
            raise self.rpc_error
        return self.rpc_result


class FakePriceCycleRepository:
    """Cycles kept in a list."""

    def __init__(self, cycles: list[PriceCycle] | None = None) -> None:
        self.cycles = cycles or []

    async def list_cycles(self, include_archived: bool = False) -> list[PriceCycle]:
        cycles = [c for c in self.cycles if include_archived or c.status != "archived"]
        return sorted(cycles, key=lambda c: c.cycle_number, reverse=True)

    async def find_active(self) -> PriceCycle | None:
        return next((c for c in self.cycles if c.status == "active"), None)

    async def latest_cycle_number(self) -> int | None:
        return max((c.cycle_number for c in self.cycles), default=None)

    async def create(
        self, cycle_number: int, start_date: datetime, end_date: datetime
    ) -> PriceCycle:
        cycle = PriceCycle(
            id=f"c{cycle_number}",
            cycle_number=cycle_number,
            start_date=start_date,
            end_date=end_date,
            status="active",
            is_active=True,
        )
        self.cycles.append(cycle)
        return cycle

    async def set_status(self, cycle_id: str, status: CycleStatus) -> None:
        self.cycles = [
            c.model_copy(update={"status": status}) if c.id == cycle_id else c
            for c in self.cycles
        ]

    async def count_active(self) -> int:
        return sum(1 for c in self.cycles if c.status == "active")


class FakeStationReportRepository:
    """Station reports kept in a list."""

    def __init__(self) -> None:
        self.inserted: list[dict[str, Any]] = []
        self.reports: list[StationReport] = []
        self.updates: list[tuple[str, ReportStatus, str, datetime]] = []

    async def insert(
        self,
        station_id: str,
        user_id: str,
        report_type: ReportType,
        reason: str,
        reported_data: dict[str, Any] | None,
    ) -> None:
        self.inserted.append(
            {
                "station_id": station_id,
                "user_id": user_id,
                "report_type": report_type,
                "reason": reason,
                "reported_data": reported_data,
            }
        )

    async def list_by_status(self, status: ReportStatus) -> list[StationReport]:
        return [r for r in self.reports if r.status == status]

    async def update_status(
        self, report_id: str, status: ReportStatus, resolver_id: str, resolved_at: datetime
    ) -> None:
        self.updates.append((report_id, status, resolver_id, resolved_at))


class FakeProfileRepository:
    """Profiles kept in a dict."""

    def __init__(self, profiles: list[UserProfile] | None = None) -> None:
        self.profiles = {p.id: p for p in profiles or []}

    async def find_by_id(self, user_id: str) -> UserProfile | None:
        return self.profiles.get(user_id)

    async def count(self) -> int:
        return len(self.profiles)
