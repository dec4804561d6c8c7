"""Main entry point and service wiring for the GasPh client."""

import logging
import sys
from types import TracebackType

import aiohttp

from gasph.adapters.config import AppConfig
from gasph.adapters.location import DeniedLocationProvider, StaticLocationProvider
from gasph.adapters.state import AuthSessionStore, JsonFileStore, LocationStore, PreferencesStore
from gasph.adapters.supabase import (
    SupabaseClient,
    SupabaseFavoriteRepository,
    SupabasePriceCycleRepository,
    SupabasePriceRepository,
    SupabaseProfileRepository,
    SupabaseStationReportRepository,
    SupabaseStationRepository,
)
from gasph.application.services.admin_stats_service import AdminStatsService
from gasph.application.services.best_price_service import BestPriceService
from gasph.application.services.favorite_station_service import FavoriteStationService
from gasph.application.services.nearby_station_service import NearbyStationService
from gasph.application.services.price_cycle_service import PriceCycleService
from gasph.application.services.price_service import PriceService
from gasph.application.services.station_report_service import StationReportService
from gasph.domain.ports.location_provider import LocationProvider

logger = logging.getLogger(__name__)

STATE_FILE_NAME = "state.json"


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def load_config() -> AppConfig:
    """Load configuration from the environment and the optional TOML file."""
    config = AppConfig()
    if config.config_file:
        config.load_toml_overrides()
        logger.debug(f"Applied overrides from {config.config_file}")
    return config


class Application:
    """Wires adapters into services for the lifetime of one aiohttp session.

    Use as an async context manager; the HTTP session is closed on exit.
    """

    def __init__(
        self,
        config: AppConfig,
        location_provider: LocationProvider | None = None,
    ) -> None:
        self.config = config
        self.state = JsonFileStore(config.state_path / STATE_FILE_NAME)
        self.preferences = PreferencesStore(self.state)
        self.auth = AuthSessionStore(self.state)
        self.location = LocationStore(
            location_provider or DeniedLocationProvider(),
            self.state,
            config.default_location,
            timeout_seconds=config.location_timeout_seconds,
        )
        self._session: aiohttp.ClientSession | None = None

    def current_user_id(self) -> str | None:
        session = self.auth.current()
        return session.user_id if session else None

    async def __aenter__(self) -> "Application":
        self._session = aiohttp.ClientSession()
        client = SupabaseClient(self.config, self._session, token_provider=self.auth.access_token)

        stations = SupabaseStationRepository(client, chunk_size=self.config.price_chunk_size)
        prices = SupabasePriceRepository(client)
        favorites = SupabaseFavoriteRepository(client)
        cycles = SupabasePriceCycleRepository(client)
        reports = SupabaseStationReportRepository(client)
        profiles = SupabaseProfileRepository(client)

        self.nearby = NearbyStationService(
            stations,
            large_radius_threshold_km=self.config.large_radius_threshold_km,
            shrink_factor=self.config.large_radius_shrink_factor,
            max_stations_per_large_query=self.config.max_stations_per_large_query,
        )
        self.best_prices = BestPriceService(
            self.nearby,
            prices,
            chunk_size=self.config.price_chunk_size,
            result_limit=self.config.best_price_result_limit,
            large_radius_station_limit=self.config.best_price_large_radius_station_limit,
        )
        self.favorites = FavoriteStationService(
            favorites,
            stations,
            prices,
            profiles,
            free_favorites_limit=self.config.free_favorites_limit,
        )
        self.prices = PriceService(prices, cycles, stations, self.current_user_id)
        self.cycles = PriceCycleService(cycles)
        self.reports = StationReportService(reports, self.current_user_id)
        self.admin_stats = AdminStatsService(stations, cycles, profiles)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None


def location_provider_for(
    latitude: float | None, longitude: float | None
) -> LocationProvider:
    """Fixed coordinates when both are given, otherwise no location access."""
    if latitude is not None and longitude is not None:
        return StaticLocationProvider(latitude, longitude)
    return DeniedLocationProvider()


if __name__ == "__main__":
    from gasph.cli import cli_main

    cli_main()
