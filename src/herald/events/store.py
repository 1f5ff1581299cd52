"""Event storage operations on the events table.

The store is bound to one session; callers own the transaction.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from herald.db.mappers import record_to_event
from herald.db.models import EventRecord
from herald.events.types import Event, EventStatus

logger = logging.getLogger(__name__)


class EventStore:
    """Session-bound CRUD and scheduler queries for events."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    async def get(self, event_id: str) -> Event | None:
        record = await self._session.get(EventRecord, event_id)
        return record_to_event(record) if record else None

    async def list_by_status(self, status: EventStatus) -> list[Event]:
        result = await self._session.execute(
            select(EventRecord).where(EventRecord.status == status)
        )
        return [record_to_event(r) for r in result.scalars()]

    async def list_by_owner(self, owner_id: str) -> list[Event]:
        result = await self._session.execute(
            select(EventRecord).where(EventRecord.user_id == owner_id)
        )
        return [record_to_event(r) for r in result.scalars()]

    async def list_due(self, now: datetime) -> list[Event]:
        """Pending events whose scheduled time is at or before ``now``."""
        result = await self._session.execute(
            select(EventRecord).where(
                EventRecord.status == EventStatus.PENDING,
                EventRecord.execute_at <= now,
            )
        )
        return [record_to_event(r) for r in result.scalars()]

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    async def insert(self, event: Event) -> Event:
        record = EventRecord(
            event_id=event.id,
            event_name=event.name,
            execute_at=event.scheduled_at,
            status=event.status,
            executed_at=event.executed_at,
            user_id=event.owner_id,
        )
        self._session.add(record)
        await self._session.flush()
        return record_to_event(record)

    async def update_fields(
        self,
        event_id: str,
        *,
        name: str | None = None,
        scheduled_at: datetime | None = None,
    ) -> Event | None:
        """Set the given content fields. Returns None if the row is gone."""
        record = await self._session.get(EventRecord, event_id)
        if record is None:
            return None
        if name is not None:
            record.event_name = name
        if scheduled_at is not None:
            record.execute_at = scheduled_at
        await self._session.flush()
        return record_to_event(record)

    async def delete(self, event_id: str) -> bool:
        result = await self._session.execute(
            delete(EventRecord).where(EventRecord.event_id == event_id)
        )
        return bool(result.rowcount)

    async def mark_executed(self, event_ids: Collection[str], now: datetime) -> int:
        """Flip exactly these ids to EXECUTED with ``executed_at = now``.

        Filters by id only. Ids that no longer exist are skipped by the
        database. Returns the number of rows updated.
        """
        if not event_ids:
            return 0
        result = await self._session.execute(
            update(EventRecord)
            .where(EventRecord.event_id.in_(list(event_ids)))
            .values(status=EventStatus.EXECUTED, executed_at=now)
            .execution_options(synchronize_session=False)
        )
        updated = result.rowcount or 0
        if updated != len(event_ids):
            logger.debug(
                "mark_executed_partial",
                extra={"events.requested": len(event_ids), "events.updated": updated},
            )
        return updated
