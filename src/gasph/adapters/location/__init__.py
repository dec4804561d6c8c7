"""Location provider adapters."""

from gasph.adapters.location.static_provider import DeniedLocationProvider, StaticLocationProvider

__all__ = ["DeniedLocationProvider", "StaticLocationProvider"]
