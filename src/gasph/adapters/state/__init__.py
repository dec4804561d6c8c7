"""Local state containers with JSON-file persistence."""

from gasph.adapters.state.auth_session_store import AuthSessionStore
from gasph.adapters.state.json_file_store import JsonFileStore
from gasph.adapters.state.location_store import LocationStore
from gasph.adapters.state.preferences_store import PreferencesStore

__all__ = ["AuthSessionStore", "JsonFileStore", "LocationStore", "PreferencesStore"]
