"""Tests for the best price service."""

import pytest

from gasph.application.services.best_price_service import (
    BestPriceService,
    calculate_stats,
    chunked,
)
from gasph.application.services.nearby_station_service import NearbyStationService
from gasph.domain.models.coordinate import LocationData
from gasph.domain.models.price import BestPrice
from tests.fakes import (
    FakePriceRepository,
    FakeStationRepository,
    make_community_price,
    make_doe_price,
    make_station,
)

USER = LocationData(14.5995, 120.9842)
DEFAULT = LocationData(14.5995, 120.9842, is_default_location=True)


def build_service(
    stations: FakeStationRepository, prices: FakePriceRepository, **kwargs: int
) -> BestPriceService:
    return BestPriceService(NearbyStationService(stations), prices, **kwargs)


@pytest.fixture
def stations() -> FakeStationRepository:
    return FakeStationRepository(
        [
            make_station("a", 14.6010, 120.9850),  # about 0.2 km
            make_station("b", 14.6300, 121.0000),  # about 3.8 km
            make_station("c", 14.6500, 121.0300),  # about 7.5 km
        ]
    )


def test_chunked_splits_into_fixed_sizes() -> None:
    """Given 250 ids, when chunking by 100, then three chunks of 100, 100 and 50 result."""
    chunks = chunked([str(i) for i in range(250)], 100)

    assert [len(c) for c in chunks] == [100, 100, 50]


def test_calculate_stats_of_empty_listing_is_none() -> None:
    """Given no prices, when computing stats, then None is returned."""
    assert calculate_stats([]) is None


@pytest.mark.asyncio
async def test_default_location_returns_nothing(stations: FakeStationRepository) -> None:
    """Given the default fallback location, when ranking, then no query is made."""
    prices = FakePriceRepository()
    service = build_service(stations, prices)

    result = await service.get_best_prices(DEFAULT)

    assert result.prices == []
    assert result.stats is None
    assert stations.box_queries == []


@pytest.mark.asyncio
async def test_ranks_by_effective_price_then_doe_then_distance(
    stations: FakeStationRepository,
) -> None:
    """Given community and DOE prices, when ranking Diesel, then cheapest effective price comes first."""
    prices = FakePriceRepository(
        community=[
            make_community_price("p1", "b", "Diesel", 57.50),
            make_community_price("p2", "c", "Diesel", 57.50),
            make_community_price("p3", "a", "RON 95", 60.00),
        ],
        doe=[
            make_doe_price("a", "DIESEL", min_price=56.00, max_price=58.00),
            make_doe_price("c", "DIESEL", min_price=55.00, max_price=58.00),
        ],
    )
    service = build_service(stations, prices)

    result = await service.get_best_prices(USER, fuel_type="Diesel")

    assert [(p.station_id, p.display_price) for p in result.prices] == [
        ("a", 56.00),
        ("c", 57.50),
        ("b", 57.50),
    ]
    assert all(p.fuel_type == "Diesel" for p in result.prices)
    assert result.stats is not None
    assert result.stats.count == 3
    assert result.stats.lowest_price == 56.00
    assert result.stats.highest_price == 57.50
    assert result.stats.average_price == pytest.approx((56.0 + 57.5 + 57.5) / 3)


@pytest.mark.asyncio
async def test_equal_prices_fall_back_to_distance(stations: FakeStationRepository) -> None:
    """Given equal community prices and no DOE data, when ranking, then nearer stations come first."""
    prices = FakePriceRepository(
        community=[
            make_community_price("p1", "c", "RON 91", 55.0),
            make_community_price("p2", "a", "RON 91", 55.0),
        ]
    )
    service = build_service(stations, prices)

    result = await service.get_best_prices(USER, fuel_type="RON 91")

    assert [p.station_id for p in result.prices] == ["a", "c"]


@pytest.mark.asyncio
async def test_all_fuel_types_when_no_filter(stations: FakeStationRepository) -> None:
    """Given no fuel filter, when ranking, then every fuel type with a price is considered."""
    prices = FakePriceRepository(
        community=[
            make_community_price("p1", "a", "RON 95", 61.0),
            make_community_price("p2", "b", "Diesel", 57.0),
        ],
        doe=[make_doe_price("c", "ron 97", min_price=64.0)],
    )
    service = build_service(stations, prices)

    result = await service.get_best_prices(USER)

    assert [(p.station_id, p.fuel_type) for p in result.prices] == [
        ("b", "Diesel"),
        ("a", "RON 95"),
        ("c", "RON 97"),
    ]


@pytest.mark.asyncio
async def test_first_community_row_per_station_fuel_wins(
    stations: FakeStationRepository,
) -> None:
    """Given two reports for one station and fuel, when ranking, then the first one is used."""
    prices = FakePriceRepository(
        community=[
            make_community_price("newest", "a", "Diesel", 59.0),
            make_community_price("older", "a", "Diesel", 50.0),
        ]
    )
    service = build_service(stations, prices)

    result = await service.get_best_prices(USER, fuel_type="Diesel")

    assert len(result.prices) == 1
    assert result.prices[0].price == 59.0


@pytest.mark.asyncio
async def test_doe_row_with_price_replaces_empty_row(stations: FakeStationRepository) -> None:
    """Given an empty DOE row followed by a priced one, when merging, then the priced one is kept."""
    prices = FakePriceRepository(
        doe=[
            make_doe_price("a", "Diesel"),
            make_doe_price("a", "DIESEL", min_price=56.5),
            make_doe_price("a", "diesel", min_price=99.0),
        ]
    )
    service = build_service(stations, prices)

    doe = await service.fetch_doe_prices(["a"], ["Diesel"])

    assert list(doe) == ["a_DIESEL"]
    assert doe["a_DIESEL"].min_price == 56.5


@pytest.mark.asyncio
async def test_doe_only_point_without_min_price_sorts_last(
    stations: FakeStationRepository,
) -> None:
    """Given a DOE row with only a common price, when ranking, then it sorts after priced points."""
    prices = FakePriceRepository(
        community=[make_community_price("p1", "c", "Diesel", 70.0)],
        doe=[make_doe_price("a", "DIESEL", common_price=56.0)],
    )
    service = build_service(stations, prices)

    result = await service.get_best_prices(USER, fuel_type="Diesel")

    assert [p.station_id for p in result.prices] == ["c", "a"]
    assert result.prices[1].display_price is None


@pytest.mark.asyncio
async def test_results_limited_to_ten() -> None:
    """Given more than ten priced stations, when ranking, then only ten are returned."""
    station_list = [make_station(f"s{i}", 14.60 + i * 0.001, 120.985) for i in range(15)]
    prices = FakePriceRepository(
        community=[
            make_community_price(f"p{i}", f"s{i}", "Diesel", 60.0 - i * 0.1) for i in range(15)
        ]
    )
    service = build_service(FakeStationRepository(station_list), prices)

    result = await service.get_best_prices(USER, fuel_type="Diesel")

    assert len(result.prices) == 10
    assert result.prices[0].station_id == "s14"


@pytest.mark.asyncio
async def test_price_queries_are_chunked_and_failures_skipped() -> None:
    """Given 250 stations and one failing chunk, when ranking, then the other chunks still count."""
    station_list = [make_station(f"s{i:03}", 14.60, 120.985 + i * 0.00001) for i in range(250)]
    prices = FakePriceRepository(
        community=[
            make_community_price("cheap", "s010", "Diesel", 50.0),
            make_community_price("ok", "s150", "Diesel", 55.0),
        ]
    )
    prices.failing_chunk_ids = {"s010"}
    service = build_service(FakeStationRepository(station_list), prices)

    result = await service.get_best_prices(USER, fuel_type="Diesel")

    assert sorted(len(c) for c in prices.community_calls) == [50, 100, 100]
    assert sorted(len(c) for c in prices.doe_calls) == [50, 100, 100]
    assert [p.station_id for p in result.prices] == ["s150"]


@pytest.mark.asyncio
async def test_large_radius_caps_station_lookup(stations: FakeStationRepository) -> None:
    """Given a max distance of at least 25 km, when ranking, then the station lookup is capped at 500."""
    service = build_service(stations, FakePriceRepository())

    result = await service.get_best_prices(USER, max_distance=30)

    assert stations.box_queries[0][1] == 500
    assert result.prices == []


def test_stats_ignore_missing_prices() -> None:
    """Given entries without any price, when computing stats, then they only count toward count."""
    priced = BestPrice(
        station_id="a", name="A", latitude=0, longitude=0, fuel_type="Diesel", price=50.0
    )
    unpriced = BestPrice(station_id="b", name="B", latitude=0, longitude=0, fuel_type="Diesel")

    stats = calculate_stats([priced, unpriced])

    assert stats is not None
    assert stats.count == 2
    assert stats.average_price == 50.0
    assert stats.highest_price == 50.0
