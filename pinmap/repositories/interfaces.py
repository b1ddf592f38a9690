"""Repository abstractions for the service layer."""

from __future__ import annotations

from typing import Protocol

from pinmap.core.entities import Pin


class PinRepository(Protocol):
    """Persistence boundary for pins.

    Implementations raise ``ConflictError`` when a pin id already exists and
    ``InternalError`` when the backing store cannot be reached.
    """

    async def add(self, pin: Pin) -> None: ...

    async def list_all(self) -> list[Pin]: ...

    async def ping(self) -> None: ...
