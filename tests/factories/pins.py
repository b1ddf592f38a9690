from __future__ import annotations

from datetime import UTC, datetime, timedelta

from pinmap.core.config import Settings
from pinmap.core.entities import Pin, PointOfInterest

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def make_pin(pin_id: str, lat: float, lng: float, *, name: str | None = None) -> Pin:
    return Pin(id=pin_id, name=name or pin_id.upper(), lat=lat, lng=lng, created_at=T0)


def make_poi(poi_id: str, name: str, category: str, lat: float = 40.0, lng: float = -74.0) -> PointOfInterest:
    return PointOfInterest(id=poi_id, name=name, lat=lat, lng=lng, category=category)


class SequentialIds:
    """Deterministic id factory: pin-1, pin-2, ..."""

    def __init__(self) -> None:
        self.n = 0

    def __call__(self) -> str:
        self.n += 1
        return f"pin-{self.n}"


class StepClock:
    def __init__(self) -> None:
        self.now = T0

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


def memory_settings(**overrides) -> Settings:
    # _env_file=None keeps a developer's .env (e.g. DATABASE_URL) out of the tests
    values = {"database_url": None, "app_env": "test", **overrides}
    return Settings(_env_file=None, **values)
