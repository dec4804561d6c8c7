"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gasph.domain.models.coordinate import LocationData


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GASPH_",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Backend configuration
    supabase_url: str = Field(
        default="http://localhost:54321", description="Base URL of the Supabase project"
    )
    supabase_anon_key: str = Field(default="", description="Anonymous (public) API key")
    request_timeout_seconds: float = Field(
        default=10.0, description="Timeout for backend requests in seconds"
    )

    # Local state
    state_dir: str = Field(
        default="~/.gasph",
        description="Directory holding persisted preferences, session and location permission",
    )

    # Default location (Metro Manila), used when the device location is unavailable
    default_latitude: float = Field(default=14.5995, description="Fallback latitude")
    default_longitude: float = Field(default=120.9842, description="Fallback longitude")
    location_timeout_seconds: float = Field(
        default=20.0, description="Timeout for a device location request in seconds"
    )

    # Search configuration
    nearby_radius_km: float = Field(default=5.0, description="Default nearby station radius")
    best_price_max_distance_km: float = Field(
        default=15.0, description="Default search radius for best prices"
    )
    best_price_result_limit: int = Field(
        default=10, description="Maximum number of best-price entries returned"
    )
    large_radius_threshold_km: float = Field(
        default=25.0, description="Radius from which large-radius query optimizations apply"
    )
    large_radius_shrink_factor: float = Field(
        default=0.9, description="Bounding box shrink factor for large-radius queries"
    )
    max_stations_per_large_query: int = Field(
        default=1000, description="Row cap for nearby-station queries with a large radius"
    )
    best_price_large_radius_station_limit: int = Field(
        default=500, description="Row cap for best-price station lookups with a large radius"
    )
    price_chunk_size: int = Field(
        default=100, description="Maximum number of station ids per price query"
    )

    # Favorites
    free_favorites_limit: int = Field(
        default=1, description="Maximum number of favorite stations for non-pro users"
    )

    # TOML config file path (optional)
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file with [search] and [location] overrides",
    )

    @field_validator(
        "nearby_radius_km",
        "best_price_max_distance_km",
        "large_radius_threshold_km",
        "request_timeout_seconds",
        "location_timeout_seconds",
    )
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate distances and timeouts are positive."""
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("large_radius_shrink_factor")
    @classmethod
    def validate_shrink_factor(cls, v: float) -> float:
        """Validate shrink factor lies in (0, 1]."""
        if not 0 < v <= 1:
            raise ValueError("large_radius_shrink_factor must be in (0, 1]")
        return v

    @field_validator(
        "price_chunk_size",
        "best_price_result_limit",
        "max_stations_per_large_query",
        "best_price_large_radius_station_limit",
    )
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Validate counts are at least 1."""
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @property
    def rest_url(self) -> str:
        """Base URL of the PostgREST API."""
        return f"{self.supabase_url.rstrip('/')}/rest/v1"

    @property
    def state_path(self) -> Path:
        """Expanded state directory."""
        return Path(self.state_dir).expanduser()

    @property
    def default_location(self) -> LocationData:
        """Fallback location flagged as default."""
        return LocationData(
            latitude=self.default_latitude,
            longitude=self.default_longitude,
            is_default_location=True,
        )

    def load_toml_overrides(self) -> dict[str, Any]:
        """Load the TOML file and apply [search] and [location] overrides.

        Returns:
            The parsed TOML document.

        Raises:
            ValueError: If config_file is not set or an override is out of range.
            FileNotFoundError: If the file does not exist.
        """
        if not self.config_file:
            raise ValueError("config_file must be set to load TOML overrides")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        search = toml_data.get("search", {})
        if "nearby_radius_km" in search:
            self.nearby_radius_km = float(search["nearby_radius_km"])
        if "best_price_max_distance_km" in search:
            self.best_price_max_distance_km = float(search["best_price_max_distance_km"])
        if "best_price_result_limit" in search:
            self.best_price_result_limit = int(search["best_price_result_limit"])
        if "large_radius_threshold_km" in search:
            self.large_radius_threshold_km = float(search["large_radius_threshold_km"])
        if "large_radius_shrink_factor" in search:
            self.large_radius_shrink_factor = float(search["large_radius_shrink_factor"])
        if "max_stations_per_large_query" in search:
            self.max_stations_per_large_query = int(search["max_stations_per_large_query"])
        if "price_chunk_size" in search:
            self.price_chunk_size = int(search["price_chunk_size"])

        location = toml_data.get("location", {})
        if "default_latitude" in location:
            self.default_latitude = float(location["default_latitude"])
        if "default_longitude" in location:
            self.default_longitude = float(location["default_longitude"])
        if "timeout_seconds" in location:
            self.location_timeout_seconds = float(location["timeout_seconds"])

        return toml_data
