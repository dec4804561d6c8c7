"""Nearby station search service."""

import logging
import math
from dataclasses import dataclass

from gasph.domain.geo import (
    LARGE_RADIUS_SHRINK_FACTOR,
    LARGE_RADIUS_THRESHOLD_KM,
    bounding_box,
    distance,
)
from gasph.domain.models.coordinate import Coordinate
from gasph.domain.models.gas_station import GasStation
from gasph.domain.ports.station_repository import StationRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class StationPage:
    """One page of stations sorted by distance."""

    stations: list[GasStation]
    page: int
    page_size: int
    total_count: int

    @property
    def has_more(self) -> bool:
        return (self.page + 1) * self.page_size < self.total_count


class NearbyStationService:
    """Finds active stations around a location, nearest first."""

    def __init__(
        self,
        station_repository: StationRepository,
        large_radius_threshold_km: float = LARGE_RADIUS_THRESHOLD_KM,
        shrink_factor: float = LARGE_RADIUS_SHRINK_FACTOR,
        max_stations_per_large_query: int = 1000,
    ) -> None:
        """Initialize with a station repository and large-radius tuning."""
        self._station_repository = station_repository
        self._large_radius_threshold_km = large_radius_threshold_km
        self._shrink_factor = shrink_factor
        self._max_stations_per_large_query = max_stations_per_large_query

    def is_large_radius(self, radius_km: float) -> bool:
        return radius_km >= self._large_radius_threshold_km

    async def find_nearby(
        self, location: Coordinate, radius_km: float = 5.0, limit: int | None = None
    ) -> list[GasStation]:
        """Stations within radius_km of location, sorted by ascending distance.

        The bounding box only pre-filters; every returned station has been
        checked against the exact haversine distance.
        """
        large = self.is_large_radius(radius_km)
        box = bounding_box(
            location,
            radius_km,
            large,
            large_radius_threshold_km=self._large_radius_threshold_km,
            shrink_factor=self._shrink_factor,
        )
        row_limit = limit if limit is not None else (
            self._max_stations_per_large_query if large else None
        )

        candidates = await self._station_repository.find_in_bounding_box(box, row_limit)
        stations = self._attach_distances(location, candidates, radius_km)
        logger.debug(
            f"Found {len(stations)} of {len(candidates)} candidate stations "
            f"within {radius_km} km"
        )
        return stations

    async def list_sorted_by_distance(
        self, location: Coordinate, page: int = 0, page_size: int = DEFAULT_PAGE_SIZE
    ) -> StationPage:
        """All active stations sorted by distance, paginated from page 0."""
        if page < 0:
            raise ValueError("page must not be negative")
        candidates = await self._station_repository.list_active()
        stations = self._attach_distances(location, candidates, math.inf)
        start = page * page_size
        return StationPage(
            stations=stations[start : start + page_size],
            page=page,
            page_size=page_size,
            total_count=len(stations),
        )

    @staticmethod
    def _attach_distances(
        location: Coordinate, stations: list[GasStation], max_distance_km: float
    ) -> list[GasStation]:
        result: list[GasStation] = []
        for station in stations:
            d = distance(location, station.coordinate)
            if math.isnan(d) or d > max_distance_km:
                continue
            result.append(station.with_distance(d))
        result.sort(key=lambda s: s.distance if s.distance is not None else math.inf)
        return result
