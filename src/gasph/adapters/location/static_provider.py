"""Location providers that do not depend on a device."""

from gasph.domain.errors import LocationUnavailableError
from gasph.domain.models.coordinate import Coordinate
from gasph.domain.ports.location_provider import LocationProvider, PermissionStatus


class StaticLocationProvider(LocationProvider):
    """Reports a fixed position, e.g. coordinates given on the command line."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self._position = Coordinate(latitude=latitude, longitude=longitude)

    async def permission_status(self) -> PermissionStatus:
        return "granted"

    async def request_permission(self) -> PermissionStatus:
        return "granted"

    async def current_position(self) -> Coordinate:
        return self._position


class DeniedLocationProvider(LocationProvider):
    """A provider for environments without location access."""

    async def permission_status(self) -> PermissionStatus:
        return "denied"

    async def request_permission(self) -> PermissionStatus:
        return "denied"

    async def current_position(self) -> Coordinate:
        raise LocationUnavailableError("Location access is not available")
