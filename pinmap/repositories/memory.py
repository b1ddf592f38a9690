"""Process-local pin repository used when no database is configured."""

from __future__ import annotations

import threading

from pinmap.core.entities import Pin
from pinmap.core.exceptions import ConflictError
from pinmap.repositories.interfaces import PinRepository


class InMemoryPinRepository(PinRepository):
    """Keeps pins in insertion order; nothing survives a restart."""

    def __init__(self, pins: list[Pin] | None = None) -> None:
        self._lock = threading.Lock()
        self._pins: dict[str, Pin] = {}
        for pin in pins or []:
            self._pins[pin.id] = pin

    async def add(self, pin: Pin) -> None:
        with self._lock:
            if pin.id in self._pins:
                raise ConflictError(f"pin {pin.id} already exists")
            self._pins[pin.id] = pin

    async def list_all(self) -> list[Pin]:
        with self._lock:
            return list(self._pins.values())

    async def ping(self) -> None:
        return None

    def __len__(self) -> int:
        return len(self._pins)
