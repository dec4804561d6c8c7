"""Tests for the persisted state containers."""

import json
from datetime import UTC, datetime
from pathlib import Path

from gasph.adapters.state import AuthSessionStore, JsonFileStore, PreferencesStore
from gasph.domain.models.fuel_type import FuelType
from gasph.domain.models.user_profile import AuthSession


def test_json_store_round_trips_values(tmp_path: Path) -> None:
    """Given a value set in one store, when a new store reads the file, then the value is there."""
    path = tmp_path / "nested" / "state.json"
    JsonFileStore(path).set("key", {"a": 1})

    assert JsonFileStore(path).get("key") == {"a": 1}
    assert json.loads(path.read_text(encoding="utf-8")) == {"key": {"a": 1}}


def test_json_store_remove(tmp_path: Path) -> None:
    """Given a stored key, when removing it, then it is gone from the file."""
    store = JsonFileStore(tmp_path / "state.json")
    store.set("a", 1)
    store.set("b", 2)

    store.remove("a")

    assert JsonFileStore(tmp_path / "state.json").get("a") is None
    assert store.get("b") == 2


def test_json_store_ignores_corrupt_file(tmp_path: Path) -> None:
    """Given a corrupt file, when reading, then the store starts empty."""
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")

    store = JsonFileStore(path)

    assert store.get("anything", "default") == "default"
    store.set("fresh", True)
    assert json.loads(path.read_text(encoding="utf-8")) == {"fresh": True}


def test_json_store_leaves_no_temp_files(tmp_path: Path) -> None:
    """Given several writes, when listing the directory, then only the state file exists."""
    store = JsonFileStore(tmp_path / "state.json")
    for i in range(3):
        store.set(f"k{i}", i)

    assert [p.name for p in tmp_path.iterdir()] == ["state.json"]


def test_preferences_default_fuel_type_persists(tmp_path: Path) -> None:
    """Given a chosen fuel type, when reloading preferences, then it is restored."""
    path = tmp_path / "state.json"
    PreferencesStore(JsonFileStore(path)).set_default_fuel_type(FuelType.RON_95)

    assert PreferencesStore(JsonFileStore(path)).default_fuel_type is FuelType.RON_95


def test_preferences_clearing_fuel_type(tmp_path: Path) -> None:
    """Given a chosen fuel type, when clearing it, then no default remains."""
    store = JsonFileStore(tmp_path / "state.json")
    preferences = PreferencesStore(store)
    preferences.set_default_fuel_type(FuelType.DIESEL)

    preferences.set_default_fuel_type(None)

    assert preferences.default_fuel_type is None
    assert store.get("default_fuel_type") is None


def test_preferences_ignore_unknown_fuel_type(tmp_path: Path) -> None:
    """Given an unknown persisted fuel type, when loading, then it is ignored."""
    store = JsonFileStore(tmp_path / "state.json")
    store.set("default_fuel_type", "Kerosene")

    assert PreferencesStore(store).default_fuel_type is None


def test_auth_session_set_and_clear(tmp_path: Path) -> None:
    """Given a stored session, when reloading and clearing, then it is restored then removed."""
    path = tmp_path / "state.json"
    session = AuthSession(
        access_token="token",
        user_id="u1",
        email="juan@example.com",
        expires_at=datetime(2025, 3, 5, 12, 0, tzinfo=UTC),
    )
    AuthSessionStore(JsonFileStore(path)).set(session)

    reloaded = AuthSessionStore(JsonFileStore(path))
    assert reloaded.current() == session
    assert reloaded.access_token() == "token"

    reloaded.clear()
    assert reloaded.current() is None
    assert AuthSessionStore(JsonFileStore(path)).current() is None


def test_auth_session_discards_malformed_data(tmp_path: Path) -> None:
    """Given a malformed persisted session, when loading, then no session is returned."""
    store = JsonFileStore(tmp_path / "state.json")
    store.set("session", {"user_id": "u1"})

    auth = AuthSessionStore(store)

    assert auth.current() is None
    assert auth.access_token() is None
