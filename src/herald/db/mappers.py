"""Row mappers for converting ORM records to domain types.

Mapping is one-way: record -> domain. Wire shapes are built from the domain
types in ``herald.server.schemas``.
"""

from __future__ import annotations

from herald.db.models import EventRecord, UserRecord
from herald.events.types import Event, EventStatus
from herald.users.types import User


def record_to_event(record: EventRecord) -> Event:
    """Convert an events row to an Event."""
    return Event(
        id=record.event_id,
        name=record.event_name,
        scheduled_at=record.execute_at,
        status=EventStatus(record.status),
        executed_at=record.executed_at,
        owner_id=record.user_id,
    )


def record_to_user(record: UserRecord) -> User:
    """Convert a users row to a User."""
    return User(
        id=record.user_id,
        username=record.username,
        display_name=record.name,
    )
