"""Radius queries on the grid index, checked against a brute-force scan."""

from __future__ import annotations

import random
import threading

import pytest

from pinmap.services.spatial_index import GridSpatialIndex, build_spatial_index
from pinmap.utils.geo import haversine_distance_m
from tests.factories import make_pin

pytestmark = pytest.mark.unit


def _ids(results) -> list[str]:
    return [r.pin.id for r in results]


def _brute_force(pins, center, radius_m) -> set[str]:
    return {p.id for p in pins if haversine_distance_m(center, p.coordinate) <= radius_m}


def test_empty_index_returns_nothing():
    assert GridSpatialIndex().query_radius((40.0, -74.0), 10_000) == []


def test_radius_filter_and_ordering():
    # ~0 m, ~1.11 km, ~5.56 km north of the centre
    index = build_spatial_index(
        [
            make_pin("far", 35.05, 139.0),
            make_pin("here", 35.0, 139.0),
            make_pin("near", 35.01, 139.0),
        ]
    )

    results = index.query_radius((35.0, 139.0), 5_000)

    assert _ids(results) == ["here", "near"]
    assert results[0].distance_m == pytest.approx(0.0, abs=1e-6)
    assert results[1].distance_m == pytest.approx(1_112.0, rel=0.01)


def test_results_sorted_ascending():
    rng = random.Random(7)
    pins = [
        make_pin(f"p{i}", 40.7 + rng.uniform(-0.05, 0.05), -74.0 + rng.uniform(-0.05, 0.05))
        for i in range(300)
    ]
    index = build_spatial_index(pins)

    results = index.query_radius((40.7, -74.0), 4_000)
    distances = [r.distance_m for r in results]

    assert distances == sorted(distances)
    assert all(d <= 4_000 for d in distances)


def test_pin_exactly_on_radius_is_included():
    pin = make_pin("edge", 0.0, 0.01)
    index = build_spatial_index([pin])
    radius = haversine_distance_m((0.0, 0.0), pin.coordinate)

    assert _ids(index.query_radius((0.0, 0.0), radius)) == ["edge"]


def test_ties_follow_insertion_order():
    index = build_spatial_index(
        [
            make_pin("b", 10.0, 10.0),
            make_pin("a", 10.0, 10.0),
            make_pin("c", 10.0, 10.0),
        ]
    )

    first = _ids(index.query_radius((10.0, 10.0), 100))
    second = _ids(index.query_radius((10.0, 10.0), 100))

    assert first == ["b", "a", "c"]
    assert first == second


@pytest.mark.parametrize(
    "center, radius_m",
    [
        ((40.7128, -74.0060), 1_000),
        ((40.7128, -74.0060), 10_000),
        ((0.0, 179.98), 5_000),  # straddles the antimeridian
        ((0.0, -179.98), 5_000),
        ((89.97, 45.0), 8_000),  # cap contains the north pole
        ((-89.99, 0.0), 3_000),
        ((60.0, 10.0), 10_000),
    ],
)
def test_matches_brute_force(center, radius_m):
    rng = random.Random(hash(center) & 0xFFFF)
    lat0, lng0 = center
    pins = []
    for i in range(400):
        lat = max(-90.0, min(90.0, lat0 + rng.uniform(-0.2, 0.2)))
        lng = lng0 + rng.uniform(-0.4, 0.4)
        # wrap into [-180, 180)
        lng = ((lng + 180.0) % 360.0) - 180.0
        pins.append(make_pin(f"p{i}", lat, lng))
    index = build_spatial_index(pins)

    got = _ids(index.query_radius(center, radius_m))

    assert set(got) == _brute_force(pins, center, radius_m)
    assert len(got) == len(set(got))


def test_antimeridian_neighbours_are_found():
    index = build_spatial_index([make_pin("west", 0.0, 179.99), make_pin("east", 0.0, -179.99)])

    results = index.query_radius((0.0, 180.0), 2_000)

    assert set(_ids(results)) == {"west", "east"}


def test_pole_pins_found_from_any_meridian():
    index = build_spatial_index([make_pin("pole", 90.0, 0.0), make_pin("almost", 89.99, -120.0)])

    assert set(_ids(index.query_radius((89.995, 170.0), 5_000))) == {"pole", "almost"}


def test_huge_radius_falls_back_to_scan():
    pins = [make_pin("nyc", 40.7128, -74.0060), make_pin("syd", -33.8688, 151.2093)]
    index = build_spatial_index(pins, cell_size_deg=1.0)

    results = index.query_radius((0.0, 0.0), 25_000_000)

    assert set(_ids(results)) == {"nyc", "syd"}


def test_negative_or_nan_radius_returns_nothing():
    index = build_spatial_index([make_pin("a", 0.0, 0.0)])
    assert index.query_radius((0.0, 0.0), -1) == []
    assert index.query_radius((0.0, 0.0), float("nan")) == []


def test_len_counts_inserts():
    index = GridSpatialIndex()
    for i in range(5):
        index.insert(make_pin(f"p{i}", float(i), float(i)))
    assert len(index) == 5


@pytest.mark.parametrize("cell", [0, -1, 181, 0.7])
def test_rejects_bad_cell_size(cell):
    with pytest.raises(ValueError):
        GridSpatialIndex(cell_size_deg=cell)


def test_concurrent_inserts_are_all_visible():
    index = GridSpatialIndex()

    def writer(offset: int) -> None:
        for i in range(200):
            index.insert(make_pin(f"w{offset}-{i}", 51.5 + i * 1e-5, -0.12 + offset * 1e-5))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(index) == 800
    assert len(index.query_radius((51.5, -0.12), 1_000)) == 800
