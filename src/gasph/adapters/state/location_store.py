"""Location state container."""

import asyncio
import logging

from gasph.adapters.state.json_file_store import JsonFileStore
from gasph.domain.errors import LocationUnavailableError
from gasph.domain.models.coordinate import LocationData
from gasph.domain.ports.location_provider import LocationProvider

logger = logging.getLogger(__name__)

LOCATION_PERMISSION_KEY = "location_permission_status"


class LocationStore:
    """Holds the user's current location with a default-location fallback.

    The store starts at the default location. initialize() runs once; while a
    fetch is in flight further calls return immediately.
    """

    def __init__(
        self,
        provider: LocationProvider,
        store: JsonFileStore,
        default_location: LocationData,
        timeout_seconds: float = 20.0,
    ) -> None:
        """Initialize the store.

        Args:
            provider: Device location service.
            store: Persistence for the last known permission status.
            default_location: Fallback used when no device fix is available.
            timeout_seconds: Timeout for a single position request.
        """
        self._provider = provider
        self._store = store
        self._default_location = default_location
        self._timeout_seconds = timeout_seconds

        self.location: LocationData = default_location
        self.loading = False
        self.error: str | None = None
        self.permission_denied = False
        self.initialized = False

    async def _check_or_request_permission(self) -> bool:
        """Check the permission, prompting only if it was not already denied."""
        try:
            status = await self._provider.permission_status()
            if status == "granted":
                self._store.set(LOCATION_PERMISSION_KEY, status)
                return True

            if status == "denied" and self._store.get(LOCATION_PERMISSION_KEY) == "denied":
                logger.debug("Location permission previously denied")
                return False

            new_status = await self._provider.request_permission()
            self._store.set(LOCATION_PERMISSION_KEY, new_status)
            return new_status == "granted"
        except LocationUnavailableError as e:
            logger.warning(f"Error checking location permission: {e}")
            return self._store.get(LOCATION_PERMISSION_KEY) == "granted"

    async def _fetch(self, fallback_on_error: bool) -> None:
        """Resolve permission and position.

        Args:
            fallback_on_error: Reset to the default location when the position
                cannot be fetched. When False the current location is kept and
                only the error is recorded.
        """
        self.loading = True
        self.error = None
        try:
            if not await self._check_or_request_permission():
                logger.info("Location permission denied, using default location")
                self.permission_denied = True
                self.location = self._default_location
                self.error = "Location permission denied."
                return

            self.permission_denied = False
            position = await asyncio.wait_for(
                self._provider.current_position(), timeout=self._timeout_seconds
            )
            self.location = LocationData(
                latitude=position.latitude,
                longitude=position.longitude,
                is_default_location=False,
            )
            logger.debug(f"Location fetched: {self.location}")
        except TimeoutError:
            if fallback_on_error:
                logger.warning("Location request timed out, using default location")
                self.location = self._default_location
                self.error = "Location request timed out"
            else:
                logger.warning("Location refresh timed out, keeping current location")
                self.error = "Location refresh timed out"
        except LocationUnavailableError as e:
            if fallback_on_error:
                logger.warning(f"Error fetching location: {e}")
                self.location = self._default_location
                self.error = str(e) or "Failed to get location"
            else:
                logger.warning(f"Error refreshing location, keeping current location: {e}")
                self.error = str(e) or "Failed to refresh location"
        finally:
            self.loading = False

    async def initialize(self) -> None:
        """Resolve the location once per store lifetime."""
        if self.initialized or self.loading:
            return
        self.initialized = True
        await self._fetch(fallback_on_error=True)

    async def refresh(self) -> None:
        """Re-fetch the location unless a fetch is already running.

        A failed refresh keeps the current location; only a permission denial
        resets it to the default.
        """
        if self.loading:
            return
        self.initialized = True
        await self._fetch(fallback_on_error=False)

    def location_with_fallback(self) -> LocationData:
        return self.location or self._default_location

    def reset_permission(self) -> None:
        """Forget the stored permission so the next initialize prompts again."""
        self._store.remove(LOCATION_PERMISSION_KEY)

    def teardown(self) -> None:
        """Return to the initial state."""
        self.location = self._default_location
        self.loading = False
        self.error = None
        self.permission_denied = False
        self.initialized = False
