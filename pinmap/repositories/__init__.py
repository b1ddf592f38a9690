from .interfaces import PinRepository
from .memory import InMemoryPinRepository

__all__ = ["InMemoryPinRepository", "PinRepository"]
