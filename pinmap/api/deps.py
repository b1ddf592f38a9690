"""API dependency helpers and service providers."""

from fastapi import Depends, Request

from pinmap.core.config import Settings
from pinmap.services.catalog import CatalogSearchIndex
from pinmap.services.health import HealthService
from pinmap.services.pin_store import PinStore

__all__ = [
    "get_catalog_index",
    "get_health_service",
    "get_pin_store",
    "get_settings_dep",
]


# Each app instance owns its store and catalog (see create_app); nothing is module-global.


def get_pin_store(request: Request) -> PinStore:
    return request.app.state.pin_store


def get_catalog_index(request: Request) -> CatalogSearchIndex:
    return request.app.state.catalog


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_health_service(store: PinStore = Depends(get_pin_store)) -> HealthService:
    return HealthService(store)
