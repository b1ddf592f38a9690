"""Read-only point-of-interest catalog and its substring search."""

from __future__ import annotations

from collections.abc import Iterable
from importlib import resources
from pathlib import Path
from typing import Any

import structlog
import yaml  # type: ignore[import-untyped]

from pinmap.core.entities import PointOfInterest
from pinmap.core.result import Failure, Ok, Result, fail
from pinmap.services.coordinates import validate_coordinates

EMPTY_QUERY_MESSAGE = "Search query is required and must not be empty"

_PACKAGE_CATALOG = "catalog.yaml"


class CatalogSearchIndex:
    """Case-insensitive substring search over name and category.

    Results keep catalog order. The lowercased search keys are computed once
    because the catalog never changes after startup.
    """

    def __init__(self, entries: Iterable[PointOfInterest]) -> None:
        self._entries: tuple[PointOfInterest, ...] = tuple(entries)
        self._keys: tuple[tuple[str, str], ...] = tuple(
            (e.name.lower(), e.category.lower()) for e in self._entries
        )

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[PointOfInterest, ...]:
        return self._entries

    def search(self, query: str | None) -> Result[list[PointOfInterest]]:
        if query is None or not query.strip():
            return fail(EMPTY_QUERY_MESSAGE)

        needle = query.strip().lower()
        matches = [
            entry
            for entry, (name, category) in zip(self._entries, self._keys)
            if needle in name or needle in category
        ]
        structlog.get_logger(__name__).info("catalog_search", q=needle, returned=len(matches))
        return Ok(matches)


def _read_yaml(handle) -> Any:  # type: ignore[no-untyped-def]
    return yaml.safe_load(handle) or {}


def _load_raw(path: str | Path | None) -> tuple[Any, str]:
    if path is not None:
        p = Path(path)
        with p.open("r", encoding="utf-8") as handle:
            return _read_yaml(handle), str(p)
    resource = resources.files("pinmap.data").joinpath(_PACKAGE_CATALOG)
    with resource.open("r", encoding="utf-8") as handle:
        return _read_yaml(handle), f"pinmap.data/{_PACKAGE_CATALOG}"


def _parse_entry(raw: Any, position: int, source: str) -> PointOfInterest:
    if not isinstance(raw, dict):
        raise ValueError(f"{source}: entry #{position} must be a mapping")
    missing = [k for k in ("id", "name", "lat", "lng", "category") if k not in raw]
    if missing:
        raise ValueError(f"{source}: entry #{position} is missing {', '.join(missing)}")
    try:
        lat = float(raw["lat"])
        lng = float(raw["lng"])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{source}: entry #{position} has non-numeric coordinates") from exc
    checked = validate_coordinates(lat, lng)
    if isinstance(checked, Failure):
        raise ValueError(f"{source}: entry #{position}: {checked.message}")
    return PointOfInterest(
        id=str(raw["id"]),
        name=str(raw["name"]),
        lat=lat,
        lng=lng,
        category=str(raw["category"]),
    )


def load_catalog(path: str | Path | None = None) -> tuple[PointOfInterest, ...]:
    """Load catalog entries from *path*, or from the packaged YAML when omitted."""

    data, source = _load_raw(path)
    if isinstance(data, dict):
        data = data.get("pois", [])
    if not isinstance(data, list):
        raise ValueError(f"Invalid catalog structure in '{source}'")

    entries: list[PointOfInterest] = []
    seen: set[str] = set()
    for position, raw in enumerate(data, start=1):
        entry = _parse_entry(raw, position, source)
        if entry.id in seen:
            raise ValueError(f"{source}: duplicate catalog id '{entry.id}'")
        seen.add(entry.id)
        entries.append(entry)

    structlog.get_logger(__name__).info("catalog_loaded", source=source, entries=len(entries))
    return tuple(entries)


__all__ = ["EMPTY_QUERY_MESSAGE", "CatalogSearchIndex", "load_catalog"]
