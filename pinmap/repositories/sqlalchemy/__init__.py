from .pin import SqlAlchemyPinRepository

__all__ = ["SqlAlchemyPinRepository"]
