"""User storage operations on the users table."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from herald.db.mappers import record_to_user
from herald.db.models import UserRecord
from herald.users.types import User


class UserStore:
    """Session-bound CRUD for users."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def exists(self, user_id: str) -> bool:
        result = await self._session.execute(
            select(UserRecord.user_id).where(UserRecord.user_id == user_id)
        )
        return result.scalar_one_or_none() is not None

    async def get(self, user_id: str) -> User | None:
        record = await self._session.get(UserRecord, user_id)
        return record_to_user(record) if record else None

    async def get_by_username(self, username: str) -> User | None:
        result = await self._session.execute(
            select(UserRecord).where(UserRecord.username == username)
        )
        record = result.scalar_one_or_none()
        return record_to_user(record) if record else None

    async def insert(self, user: User) -> User:
        record = UserRecord(
            user_id=user.id,
            username=user.username,
            name=user.display_name,
        )
        self._session.add(record)
        await self._session.flush()
        return record_to_user(record)

    async def update_fields(
        self,
        user_id: str,
        *,
        username: str | None = None,
        display_name: str | None = None,
    ) -> User | None:
        record = await self._session.get(UserRecord, user_id)
        if record is None:
            return None
        if username is not None:
            record.username = username
        if display_name is not None:
            record.name = display_name
        await self._session.flush()
        return record_to_user(record)

    async def delete(self, user_id: str) -> bool:
        """Delete a user; the events foreign key cascades to owned events."""
        record = await self._session.get(UserRecord, user_id)
        if record is None:
            return False
        await self._session.delete(record)
        await self._session.flush()
        return True
