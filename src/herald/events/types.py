"""Event domain types.

Public types:
- EventStatus: lifecycle status (pending -> executed, one way)
- Event: a scheduled event as seen by the services
- EventPatch: partial update for a pending event
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class EventStatus(StrEnum):
    """Allowed event statuses."""

    PENDING = "pending"
    EXECUTED = "executed"


@dataclass(frozen=True)
class Event:
    """A single scheduled event.

    ``executed_at`` is set iff ``status`` is EXECUTED.
    """

    id: str
    name: str
    scheduled_at: datetime
    status: EventStatus
    owner_id: str
    executed_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        return self.status == EventStatus.PENDING

    @property
    def is_executed(self) -> bool:
        return self.status == EventStatus.EXECUTED


@dataclass(frozen=True)
class EventPatch:
    """Fields to change on a pending event. ``None`` leaves a field as is."""

    name: str | None = None
    scheduled_at: datetime | None = None

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.scheduled_at is None
