"""SQLAlchemy implementation of the pin repository."""

from __future__ import annotations

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pinmap.core.entities import Pin
from pinmap.core.exceptions import ConflictError, InternalError
from pinmap.models import PinRecord
from pinmap.repositories.interfaces import PinRepository


def _to_pin(record: PinRecord) -> Pin:
    return Pin(
        id=str(record.id),
        name=str(record.name),
        lat=float(record.latitude),
        lng=float(record.longitude),
        created_at=record.created_at,
    )


class SqlAlchemyPinRepository(PinRepository):
    """Pins stored in the ``pins`` table, one short-lived session per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def add(self, pin: Pin) -> None:
        record = PinRecord(
            id=pin.id,
            name=pin.name,
            latitude=pin.lat,
            longitude=pin.lng,
            created_at=pin.created_at,
        )
        try:
            async with self._session_factory() as session:
                session.add(record)
                await session.commit()
        except IntegrityError as exc:
            raise ConflictError(f"pin {pin.id} already exists") from exc
        except SQLAlchemyError as exc:
            raise InternalError("failed to persist pin") from exc

    async def list_all(self) -> list[Pin]:
        stmt = select(PinRecord).order_by(PinRecord.created_at.asc(), PinRecord.id.asc())
        try:
            async with self._session_factory() as session:
                records = (await session.scalars(stmt)).all()
        except SQLAlchemyError as exc:
            raise InternalError("failed to load pins") from exc
        return [_to_pin(r) for r in records]

    async def ping(self) -> None:
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise InternalError("database unavailable") from exc
