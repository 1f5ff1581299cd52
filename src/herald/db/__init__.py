"""Database layer."""

from herald.db.engine import Database
from herald.db.models import Base, EventRecord, UserRecord

__all__ = [
    # Engine
    "Database",
    # Models
    "Base",
    "EventRecord",
    "UserRecord",
]
