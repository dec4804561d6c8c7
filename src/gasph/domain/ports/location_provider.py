"""Device location provider port."""

from typing import Literal, Protocol

from gasph.domain.models.coordinate import Coordinate

PermissionStatus = Literal["granted", "denied", "undetermined"]


class LocationProvider(Protocol):
    """Port for the device's location service."""

    async def permission_status(self) -> PermissionStatus:
        """Current permission status without prompting."""
        ...

    async def request_permission(self) -> PermissionStatus:
        """Prompt for permission and return the outcome."""
        ...

    async def current_position(self) -> Coordinate:
        """Current device position."""
        ...
