"""Grid-backed spatial index for radius queries over pins."""

from __future__ import annotations

import math
import threading
from collections.abc import Iterable, Iterator
from typing import NamedTuple

from pinmap.core.entities import Pin, ProximityResult
from pinmap.utils.geo import EARTH_RADIUS_M, LatLng, haversine_distance_m

DEFAULT_CELL_SIZE_DEG = 0.1


class _Entry(NamedTuple):
    seq: int
    pin: Pin


class GridSpatialIndex:
    """Uniform lat/lng grid over pins.

    Each cell maps to an immutable tuple of entries. ``insert`` builds the new
    tuple under a write lock and publishes it with one dict assignment, so a
    concurrent ``query_radius`` sees the pin either completely or not at all
    and never has to take the lock itself.

    Candidate cells come from the bounding box of the spherical cap around the
    query centre (padded by one cell on every side); each candidate is then
    checked with the haversine distance. Results are ordered by distance, ties
    by insertion order.
    """

    def __init__(self, cell_size_deg: float = DEFAULT_CELL_SIZE_DEG) -> None:
        if not 0 < cell_size_deg <= 180:
            raise ValueError("cell_size_deg must be in (0, 180]")
        lng_cells = round(360.0 / cell_size_deg)
        if abs(lng_cells * cell_size_deg - 360.0) > 1e-9:
            raise ValueError("cell_size_deg must evenly divide 360")

        self._cell = float(cell_size_deg)
        self._lng_cells = lng_cells
        self._lat_cells = math.ceil(180.0 / cell_size_deg)
        self._cells: dict[tuple[int, int], tuple[_Entry, ...]] = {}
        self._write_lock = threading.Lock()
        self._seq = 0

    def __len__(self) -> int:
        return self._seq

    @property
    def cell_size_deg(self) -> float:
        return self._cell

    def _lat_index(self, lat: float) -> int:
        i = int(math.floor((lat + 90.0) / self._cell))
        return min(max(i, 0), self._lat_cells - 1)

    def _lng_index(self, lng: float) -> int:
        return int(math.floor((lng + 180.0) / self._cell)) % self._lng_cells

    def _cell_key(self, lat: float, lng: float) -> tuple[int, int]:
        return (self._lat_index(lat), self._lng_index(lng))

    def insert(self, pin: Pin) -> None:
        key = self._cell_key(pin.lat, pin.lng)
        with self._write_lock:
            entry = _Entry(self._seq, pin)
            self._cells[key] = self._cells.get(key, ()) + (entry,)
            self._seq += 1

    def _lat_rows(self, lat_min: float, lat_max: float) -> range:
        first = max(self._lat_index(lat_min) - 1, 0)
        last = min(self._lat_index(lat_max) + 1, self._lat_cells - 1)
        return range(first, last + 1)

    def _lng_columns(self, lng: float, half_width: float | None) -> list[int]:
        if half_width is None:
            return list(range(self._lng_cells))
        first = int(math.floor((lng - half_width + 180.0) / self._cell)) - 1
        last = int(math.floor((lng + half_width + 180.0) / self._cell)) + 1
        if last - first + 1 >= self._lng_cells:
            return list(range(self._lng_cells))
        return [j % self._lng_cells for j in range(first, last + 1)]

    def _candidate_cells(self, center: LatLng, radius_m: float) -> list[tuple[int, int]] | None:
        """Cells that may hold a pin within ``radius_m``; None means "everything"."""

        lat, lng = center
        angular = radius_m / EARTH_RADIUS_M
        if angular >= math.pi:
            return None

        dlat = math.degrees(angular)
        lat_min = lat - dlat
        lat_max = lat + dlat

        half_width: float | None
        if lat_min <= -90.0 or lat_max >= 90.0:
            # The cap contains a pole: every meridian is in reach
            half_width = None
        else:
            ratio = math.sin(angular) / math.cos(math.radians(lat))
            half_width = None if ratio >= 1.0 else math.degrees(math.asin(ratio))

        rows = self._lat_rows(max(lat_min, -90.0), min(lat_max, 90.0))
        columns = self._lng_columns(lng, half_width)
        return [(i, j) for i in rows for j in columns]

    def _candidates(self, center: LatLng, radius_m: float) -> Iterator[_Entry]:
        keys = self._candidate_cells(center, radius_m)
        if keys is None or len(keys) > len(self._cells):
            # Cheaper to walk the occupied cells than to probe the empty ones
            for bucket in tuple(self._cells.values()):
                yield from bucket
            return
        cells = self._cells
        for key in keys:
            yield from cells.get(key, ())

    def query_radius(self, center: LatLng, radius_m: float) -> list[ProximityResult]:
        if math.isnan(radius_m) or radius_m < 0:
            return []

        hits: list[tuple[float, int, Pin]] = []
        for entry in self._candidates(center, radius_m):
            distance = haversine_distance_m(center, entry.pin.coordinate)
            if distance <= radius_m:
                hits.append((distance, entry.seq, entry.pin))

        hits.sort(key=lambda hit: (hit[0], hit[1]))
        return [ProximityResult(pin=pin, distance_m=distance) for distance, _, pin in hits]


def build_spatial_index(
    pins: Iterable[Pin], *, cell_size_deg: float = DEFAULT_CELL_SIZE_DEG
) -> GridSpatialIndex:
    index = GridSpatialIndex(cell_size_deg=cell_size_deg)
    for pin in pins:
        index.insert(pin)
    return index


__all__ = ["DEFAULT_CELL_SIZE_DEG", "GridSpatialIndex", "build_spatial_index"]
