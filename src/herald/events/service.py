"""Event lifecycle service.

Owns creation and mutation of events. Mutation is allowed only while an
event is PENDING; once the scheduler has executed it, its name and scheduled
time are frozen. The scheduler is the only writer of ``status`` and
``executed_at``.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from herald.clock import Clock, ensure_utc
from herald.db.engine import Database
from herald.errors import InvalidArgumentError, InvalidStateError, NotFoundError
from herald.events.store import EventStore
from herald.events.types import Event, EventPatch, EventStatus
from herald.users.store import UserStore

logger = logging.getLogger(__name__)


class EventService:
    """Async facade for event lifecycle operations."""

    def __init__(self, database: Database, clock: Clock) -> None:
        self._database = database
        self._clock = clock

    async def create(self, owner_id: str, name: str, scheduled_at: datetime) -> Event:
        """Schedule a new PENDING event for an existing user.

        Raises:
            InvalidArgumentError: If the name is blank or the time is not in
                the future.
            NotFoundError: If the owner does not exist.
        """
        text = _require_name(name)
        scheduled_at = ensure_utc(scheduled_at)
        if scheduled_at <= self._clock.now():
            raise InvalidArgumentError("execute_at must be a future date")

        async with self._database.session() as session:
            if not await UserStore(session).exists(owner_id):
                raise NotFoundError("User not found")

            event = await EventStore(session).insert(
                Event(
                    id=str(uuid.uuid4()),
                    name=text,
                    scheduled_at=scheduled_at,
                    status=EventStatus.PENDING,
                    owner_id=owner_id,
                )
            )

        logger.info(
            "event_scheduled",
            extra={
                "event.id": event.id,
                "event.owner_id": owner_id,
                "event.scheduled_at": event.scheduled_at.isoformat(),
            },
        )
        return event

    async def list_pending(self) -> list[Event]:
        async with self._database.session() as session:
            return await EventStore(session).list_by_status(EventStatus.PENDING)

    async def list_for_owner(self, owner_id: str) -> list[Event]:
        """All events of any status owned by the user.

        Raises:
            NotFoundError: If the user has no events (including unknown users).
        """
        async with self._database.session() as session:
            events = await EventStore(session).list_by_owner(owner_id)
        if not events:
            raise NotFoundError("User has no scheduled events")
        return events

    async def get(self, event_id: str) -> Event:
        async with self._database.session() as session:
            event = await EventStore(session).get(event_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event

    async def update(self, event_id: str, patch: EventPatch) -> Event:
        """Apply the provided fields to a PENDING event.

        The new scheduled time is not required to be in the future.

        Raises:
            NotFoundError: If the event does not exist.
            InvalidStateError: If the event is no longer pending.
            InvalidArgumentError: If a new name is given but blank.
        """
        name = _require_name(patch.name) if patch.name is not None else None
        scheduled_at = (
            ensure_utc(patch.scheduled_at) if patch.scheduled_at is not None else None
        )

        async with self._database.session() as session:
            store = EventStore(session)
            event = _require_pending(
                await store.get(event_id), "Only pending events can be updated"
            )
            if patch.is_empty:
                return event
            updated = await store.update_fields(
                event_id, name=name, scheduled_at=scheduled_at
            )

        if updated is None:
            # Deleted between the read and the write
            raise NotFoundError("Event not found")

        logger.info(
            "event_updated",
            extra={
                "event.id": event_id,
                "event.name_changed": name is not None,
                "event.rescheduled": scheduled_at is not None,
            },
        )
        return updated

    async def delete(self, event_id: str) -> Event:
        """Delete a PENDING event and return its last state.

        Raises:
            NotFoundError: If the event does not exist.
            InvalidStateError: If the event is no longer pending.
        """
        async with self._database.session() as session:
            store = EventStore(session)
            event = _require_pending(
                await store.get(event_id), "Only pending events can be deleted"
            )
            await store.delete(event_id)

        logger.info("event_deleted", extra={"event.id": event_id})
        return event


def _require_name(name: str) -> str:
    text = name.strip()
    if not text:
        raise InvalidArgumentError("event_name must not be empty")
    return text


def _require_pending(event: Event | None, message: str) -> Event:
    if event is None:
        raise NotFoundError("Event not found")
    if not event.is_pending:
        raise InvalidStateError(message)
    return event
