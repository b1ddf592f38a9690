"""Immutable value types shared by the store, the index and the catalog."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pinmap.utils.geo import LatLng


@dataclass(frozen=True)
class Pin:
    id: str
    name: str
    lat: float
    lng: float
    created_at: datetime

    @property
    def coordinate(self) -> LatLng:
        return (self.lat, self.lng)


@dataclass(frozen=True)
class PointOfInterest:
    id: str
    name: str
    lat: float
    lng: float
    category: str

    @property
    def coordinate(self) -> LatLng:
        return (self.lat, self.lng)


@dataclass(frozen=True)
class ProximityResult:
    pin: Pin
    distance_m: float


@dataclass(frozen=True)
class NearbyPin:
    id: str
    name: str
    lat: float
    lng: float
    distance_m: float

    @classmethod
    def from_result(cls, result: ProximityResult) -> NearbyPin:
        pin = result.pin
        return cls(id=pin.id, name=pin.name, lat=pin.lat, lng=pin.lng, distance_m=result.distance_m)


__all__ = ["NearbyPin", "Pin", "PointOfInterest", "ProximityResult"]
