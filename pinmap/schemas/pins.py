from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from pinmap.core.entities import NearbyPin


class PinCreateRequest(BaseModel):
    # Ranges and name rules are checked by PinStore so the messages stay stable
    name: str = Field(description="Pin name (1..255 characters)")
    lat: float = Field(description="Latitude (-90..90)")
    lng: float = Field(description="Longitude (-180..180)")


class PinCreatedResponse(BaseModel):
    id: str = Field(description="Generated pin id")
    status: Literal["created"] = "created"


class NearbyPinItem(BaseModel):
    id: str = Field(description="Pin id")
    name: str = Field(description="Pin name")
    lat: float = Field(description="Latitude")
    lng: float = Field(description="Longitude")
    distance_m: float = Field(description="Great-circle distance from `near` in metres")

    @classmethod
    def from_nearby(cls, item: NearbyPin) -> NearbyPinItem:
        return cls(id=item.id, name=item.name, lat=item.lat, lng=item.lng, distance_m=item.distance_m)
