# Importing the models here lets Alembic find every table through Base.metadata
from .base import Base
from .pin import PinRecord

__all__ = ["Base", "PinRecord"]
