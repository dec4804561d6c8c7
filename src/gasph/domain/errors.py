"""Exceptions raised by GasPh services and adapters."""

from gasph.domain.models.error_details import ErrorDetails

# PostgREST code for "single row requested, none returned"
NO_ROWS_CODE = "PGRST116"
# PostgREST code for "function not found in schema cache"
FUNCTION_NOT_FOUND_CODE = "PGRST202"


class GasPhError(Exception):
    """Base class for all GasPh errors."""


class BackendError(GasPhError):
    """The remote backend rejected a request or could not be reached."""

    def __init__(self, details: ErrorDetails) -> None:
        super().__init__(details.reason)
        self.details = details

    @property
    def code(self) -> str | None:
        return self.details.code

    @property
    def status_code(self) -> int | None:
        return self.details.status_code

    @property
    def is_no_rows(self) -> bool:
        """True when a single-row request matched nothing."""
        return self.details.code == NO_ROWS_CODE


class NotAuthenticatedError(GasPhError):
    """The operation needs a signed-in user."""

    def __init__(self, message: str = "User must be logged in") -> None:
        super().__init__(message)


class FavoriteLimitError(GasPhError):
    """A free user tried to add more favorites than allowed."""

    def __init__(self, message: str = "Favorite limit reached for free users.") -> None:
        super().__init__(message)


class NoActiveCycleError(GasPhError):
    """No price reporting cycle is currently active."""

    def __init__(
        self, message: str = "Could not find an active price reporting cycle."
    ) -> None:
        super().__init__(message)


class DuplicateReportError(GasPhError):
    """The user already has a pending report for the station."""

    def __init__(self, message: str = "You already have a pending report for this station.") -> None:
        super().__init__(message)


class InvalidPriceError(GasPhError):
    """A submitted price is not a positive number."""


class LocationUnavailableError(GasPhError):
    """The device location could not be determined."""
