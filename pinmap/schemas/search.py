from __future__ import annotations

from pydantic import BaseModel, Field

from pinmap.core.entities import PointOfInterest


class PoiItem(BaseModel):
    id: str = Field(description="Catalog id")
    name: str = Field(description="Name")
    lat: float = Field(description="Latitude")
    lng: float = Field(description="Longitude")
    category: str = Field(description="Category, e.g. coffee shop")

    @classmethod
    def from_poi(cls, poi: PointOfInterest) -> PoiItem:
        return cls(id=poi.id, name=poi.name, lat=poi.lat, lng=poi.lng, category=poi.category)
