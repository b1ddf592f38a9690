from __future__ import annotations

from pinmap.services.pin_store import PinStore


class HealthService:
    def __init__(self, store: PinStore):
        self._store = store

    async def ok(self) -> dict:
        await self._store.ping()
        return {"ok": True}
