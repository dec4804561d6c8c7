"""Tests for domain models."""

import math
from datetime import date

import pytest
from pydantic import ValidationError

from gasph.domain.models import (
    ALL_FUEL_TYPES,
    BestPrice,
    BoundingBox,
    CommunityPrice,
    Coordinate,
    DoePrice,
    FuelType,
    GasStation,
    LocationData,
    PriceCycle,
    PricePoint,
)


def make_station(**overrides: object) -> GasStation:
    data: dict[str, object] = {
        "id": "s1",
        "name": "Petron EDSA",
        "brand": "Petron",
        "city": "Quezon City",
        "latitude": 14.65,
        "longitude": 121.03,
    }
    data.update(overrides)
    return GasStation.model_validate(data)


def test_location_data_defaults_to_real_fix() -> None:
    """Given only coordinates, when creating LocationData, then it is not the default location."""
    location = LocationData(14.6, 121.0)

    assert location.is_default_location is False
    assert isinstance(location, Coordinate)


def test_bounding_box_contains_edges() -> None:
    """Given a box, when checking points on its edges, then they are inside."""
    box = BoundingBox(min_lat=14.0, max_lat=15.0, min_lng=120.0, max_lng=121.0)

    assert box.contains(Coordinate(14.0, 121.0))
    assert box.contains(Coordinate(14.5, 120.5))
    assert not box.contains(Coordinate(15.01, 120.5))


def test_fuel_types_cover_philippine_grades() -> None:
    """Given the fuel type enum, when listing, then all six grades are present in order."""
    assert [str(ft) for ft in ALL_FUEL_TYPES] == [
        "Diesel",
        "RON 91",
        "RON 95",
        "RON 97",
        "RON 100",
        "Diesel Plus",
    ]
    assert FuelType("RON 95") is FuelType.RON_95


def test_gas_station_ignores_unknown_columns() -> None:
    """Given a row with extra columns, when validating, then they are ignored."""
    station = make_station(some_new_column="x", amenities=None)

    assert station.id == "s1"
    assert station.amenities is None
    assert station.coordinate == Coordinate(14.65, 121.03)


def test_gas_station_requires_coordinates() -> None:
    """Given a row without latitude, when validating, then validation fails."""
    with pytest.raises(ValidationError):
        GasStation.model_validate({"id": "s1", "name": "X", "longitude": 121.0})


def test_with_distance_returns_copy() -> None:
    """Given a station, when attaching a distance, then the original is unchanged."""
    station = make_station()

    located = station.with_distance(2.5)

    assert located.distance == 2.5
    assert station.distance is None


def test_price_point_prefers_community_price() -> None:
    """Given community and DOE prices, when reading effective price, then community wins."""
    point = PricePoint(
        station=make_station(),
        fuel_type="Diesel",
        community_price=CommunityPrice(id="p1", station_id="s1", fuel_type="Diesel", price=58.0),
        doe_price=DoePrice(gas_station_id="s1", fuel_type="DIESEL", min_price=57.0),
    )

    assert point.effective_price == 58.0
    assert point.doe_min_price == 57.0


def test_price_point_zero_doe_min_counts_as_missing() -> None:
    """Given a DOE minimum of zero, when reading prices, then it sorts as infinity."""
    point = PricePoint(
        station=make_station(),
        fuel_type="Diesel",
        doe_price=DoePrice(gas_station_id="s1", fuel_type="DIESEL", min_price=0, max_price=60.0),
    )

    assert point.doe_min_price == math.inf
    assert point.effective_price == math.inf


def test_doe_price_has_price() -> None:
    """Given DOE rows with and without prices, when checking has_price, then it reflects them."""
    assert DoePrice(gas_station_id="s1", fuel_type="DIESEL", common_price=59.0).has_price
    assert not DoePrice(gas_station_id="s1", fuel_type="DIESEL").has_price


def test_best_price_flattens_point() -> None:
    """Given a DOE-only point, when flattening, then station and DOE fields are carried."""
    point = PricePoint(
        station=make_station().with_distance(1.2),
        fuel_type="RON 91",
        doe_price=DoePrice(
            gas_station_id="s1",
            fuel_type="RON 91",
            min_price=55.5,
            max_price=57.0,
            week_of=date(2025, 3, 3),
        ),
    )

    best = BestPrice.from_point(point)

    assert best.station_id == "s1"
    assert best.name == "Petron EDSA"
    assert best.distance == 1.2
    assert best.price is None
    assert best.min_price == 55.5
    assert best.display_price == 55.5
    assert best.week_of == date(2025, 3, 3)


def test_price_cycle_reads_active_flag() -> None:
    """Given a cycle row with is_active, when parsing, then the flag is kept; it is optional."""
    row = {
        "id": "c1",
        "cycle_number": 1,
        "start_date": "2025-03-01T00:00:00+00:00",
        "end_date": "2025-03-08T00:00:00+00:00",
        "status": "active",
    }

    assert PriceCycle.model_validate({**row, "is_active": True}).is_active is True
    assert PriceCycle.model_validate(row).is_active is None
