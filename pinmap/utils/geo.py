"""Geospatial utility helpers used by the index and services."""

from __future__ import annotations

import math

LatLng = tuple[float, float]

EARTH_RADIUS_M = 6_371_000.0


def _central_angle(point_a: LatLng, point_b: LatLng) -> float:
    lat1, lng1 = point_a
    lat2, lng2 = point_b

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lng2 - lng1)

    sin_dphi = math.sin(dphi / 2.0)
    sin_dlambda = math.sin(dlambda / 2.0)

    a = sin_dphi**2 + math.cos(phi1) * math.cos(phi2) * sin_dlambda**2
    # NaN compares false on both sides, so it falls through and propagates
    if a < 0.0:
        a = 0.0
    elif a > 1.0:
        a = 1.0
    return 2.0 * math.asin(math.sqrt(a))


def haversine_distance_m(point_a: LatLng, point_b: LatLng, *, radius_m: float = EARTH_RADIUS_M) -> float:
    """Compute the great-circle distance between two points in metres.

    Spherical Earth with mean radius 6,371 km. The haversine term is clamped to
    ``[0, 1]`` to avoid floating point drift near the poles and antipodes, which
    also keeps the result symmetric and exactly ``0.0`` for identical points.
    """

    return radius_m * _central_angle(point_a, point_b)


__all__ = [
    "EARTH_RADIUS_M",
    "LatLng",
    "haversine_distance_m",
]
