from .record import StoredRecord
from ..core.database import Base

__all__ = [
    "StoredRecord",
    "Base",
]
