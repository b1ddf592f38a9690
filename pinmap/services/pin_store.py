"""Pin lifecycle: validated creation, persistence, and proximity queries."""

from __future__ import annotations

import re
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from pinmap.core.entities import NearbyPin, Pin
from pinmap.core.result import Failure, Ok, Result, fail
from pinmap.repositories.interfaces import PinRepository
from pinmap.services.coordinates import parse_near_parameter, validate_coordinates
from pinmap.services.spatial_index import GridSpatialIndex

MISSING_PARAMETERS_MESSAGE = "Missing required parameters: near and radius"
RADIUS_MESSAGE = "Radius must be a number between 1 and 10000 meters"
NAME_REQUIRED_MESSAGE = "Name is required and must not be empty"
NAME_TOO_LONG_MESSAGE = "Name must be at most 255 characters"

MIN_RADIUS_M = 1
MAX_RADIUS_M = 10_000
MAX_NAME_LENGTH = 255

_INTEGER_RE = re.compile(r"^\s*[+-]?[0-9]+\s*$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def parse_radius(radius: str) -> int | None:
    """Return the radius in metres, or None when it is not an in-range integer."""

    if not _INTEGER_RE.match(radius):
        return None
    try:
        value = int(radius)
    except ValueError:
        # Past the interpreter's digit limit; far out of range anyway
        return None
    if value < MIN_RADIUS_M or value > MAX_RADIUS_M:
        return None
    return value


def _check_name(name: str) -> Failure | None:
    if not name:
        return fail(NAME_REQUIRED_MESSAGE)
    if len(name) > MAX_NAME_LENGTH:
        return fail(NAME_TOO_LONG_MESSAGE)
    return None


class PinStore:
    """Owns the pins of one service instance.

    The store is the only writer of its index. A pin reaches the index only
    after the repository accepted it, so a failed ``create`` leaves nothing
    behind for ``nearby`` to find.
    """

    def __init__(
        self,
        repository: PinRepository,
        index: GridSpatialIndex,
        *,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._repository = repository
        self._index = index
        self._clock = clock
        self._id_factory = id_factory
        self._loaded = False

    @property
    def index(self) -> GridSpatialIndex:
        return self._index

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> int:
        """Index every pin the repository already holds. Runs once per store."""
        logger = structlog.get_logger(__name__)
        if self._loaded:
            logger.info("pin_index_load_skipped", reason="already_loaded")
            return 0

        pins = await self._repository.list_all()
        for pin in pins:
            self._index.insert(pin)
        self._loaded = True
        logger.info("pin_index_loaded", pins=len(pins))
        return len(pins)

    async def ping(self) -> None:
        await self._repository.ping()

    async def create(self, name: str, lat: float, lng: float) -> Result[Pin]:
        checked = validate_coordinates(lat, lng)
        if isinstance(checked, Failure):
            return checked
        name_failure = _check_name(name)
        if name_failure is not None:
            return name_failure

        lat_ok, lng_ok = checked.value
        pin = Pin(
            id=self._id_factory(),
            name=name,
            lat=lat_ok,
            lng=lng_ok,
            created_at=self._clock(),
        )
        # Repository errors propagate as InternalError/ConflictError
        await self._repository.add(pin)
        self._index.insert(pin)

        structlog.get_logger(__name__).info("pin_created", pin_id=pin.id, lat=pin.lat, lng=pin.lng)
        return Ok(pin)

    def nearby(self, near: str | None, radius: str | None) -> Result[list[NearbyPin]]:
        if not near or not radius:
            return fail(MISSING_PARAMETERS_MESSAGE)

        center = parse_near_parameter(near)
        if isinstance(center, Failure):
            return center

        radius_m = parse_radius(radius)
        if radius_m is None:
            return fail(RADIUS_MESSAGE)

        results = self._index.query_radius(center.value, float(radius_m))
        lat, lng = center.value
        structlog.get_logger(__name__).info(
            "pins_nearby", lat=lat, lng=lng, radius_m=radius_m, returned=len(results)
        )
        return Ok([NearbyPin.from_result(r) for r in results])


__all__ = [
    "MAX_NAME_LENGTH",
    "MAX_RADIUS_M",
    "MIN_RADIUS_M",
    "MISSING_PARAMETERS_MESSAGE",
    "NAME_REQUIRED_MESSAGE",
    "NAME_TOO_LONG_MESSAGE",
    "RADIUS_MESSAGE",
    "PinStore",
    "parse_radius",
]
