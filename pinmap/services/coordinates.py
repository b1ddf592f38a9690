"""Coordinate validation and the compact ``lat,lng`` query format."""

from __future__ import annotations

import math

from pinmap.core.result import Ok, Result, fail
from pinmap.utils.geo import LatLng

LATITUDE_RANGE_MESSAGE = "Latitude must be between -90 and 90"
LONGITUDE_RANGE_MESSAGE = "Longitude must be between -180 and 180"
NEAR_FORMAT_MESSAGE = "Near parameter must be in format lat,lng"
NEAR_INVALID_MESSAGE = "Invalid coordinates in near parameter"


def _in_range(value: float, bound: float) -> bool:
    # Written as a positive check so NaN is rejected too
    return -bound <= value <= bound


def validate_coordinates(lat: float, lng: float) -> Result[LatLng]:
    if not _in_range(lat, 90.0):
        return fail(LATITUDE_RANGE_MESSAGE)
    if not _in_range(lng, 180.0):
        return fail(LONGITUDE_RANGE_MESSAGE)
    return Ok((float(lat), float(lng)))


def _parse_number(text: str) -> float | None:
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_near_parameter(near: str) -> Result[LatLng]:
    """Parse ``"<lat>,<lng>"`` and range-check the pair."""

    parts = near.split(",")
    if len(parts) != 2:
        return fail(NEAR_FORMAT_MESSAGE)

    lat = _parse_number(parts[0])
    lng = _parse_number(parts[1])
    if lat is None or lng is None:
        return fail(NEAR_INVALID_MESSAGE)

    return validate_coordinates(lat, lng)


__all__ = [
    "LATITUDE_RANGE_MESSAGE",
    "LONGITUDE_RANGE_MESSAGE",
    "NEAR_FORMAT_MESSAGE",
    "NEAR_INVALID_MESSAGE",
    "parse_near_parameter",
    "validate_coordinates",
]
