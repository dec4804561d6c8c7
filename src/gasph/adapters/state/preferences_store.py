"""User preferences state container."""

import logging

from gasph.adapters.state.json_file_store import JsonFileStore
from gasph.domain.models.fuel_type import FuelType

logger = logging.getLogger(__name__)

DEFAULT_FUEL_TYPE_KEY = "default_fuel_type"


class PreferencesStore:
    """Holds the user's preferred fuel type, persisted between runs."""

    def __init__(self, store: JsonFileStore) -> None:
        self._store = store
        self._default_fuel_type: FuelType | None = None
        self._loaded = False

    def load(self) -> None:
        """Read persisted preferences, ignoring unknown fuel types."""
        raw = self._store.get(DEFAULT_FUEL_TYPE_KEY)
        try:
            self._default_fuel_type = FuelType(raw) if raw else None
        except ValueError:
            logger.warning(f"Ignoring unknown persisted fuel type: {raw!r}")
            self._default_fuel_type = None
        self._loaded = True

    @property
    def default_fuel_type(self) -> FuelType | None:
        if not self._loaded:
            self.load()
        return self._default_fuel_type

    def set_default_fuel_type(self, fuel_type: FuelType | None) -> None:
        """Update the preferred fuel type (None clears it)."""
        self._default_fuel_type = fuel_type
        self._loaded = True
        if fuel_type is None:
            self._store.remove(DEFAULT_FUEL_TYPE_KEY)
        else:
            self._store.set(DEFAULT_FUEL_TYPE_KEY, fuel_type.value)
