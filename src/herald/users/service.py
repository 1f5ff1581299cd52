"""User directory service."""

from __future__ import annotations

import logging
import uuid

from herald.db.engine import Database
from herald.errors import ConflictError, InvalidArgumentError, NotFoundError
from herald.events.store import EventStore
from herald.events.types import Event
from herald.users.store import UserStore
from herald.users.types import MIN_USERNAME_LENGTH, User, UserPatch

logger = logging.getLogger(__name__)


class UserService:
    """Create, look up, update and delete event owners."""

    def __init__(self, database: Database) -> None:
        self._database = database

    async def create(self, username: str, display_name: str) -> User:
        username = _require_username(username)
        display_name = _require_display_name(display_name)

        async with self._database.session() as session:
            store = UserStore(session)
            if await store.get_by_username(username) is not None:
                raise ConflictError(f"Username '{username}' is already taken")
            user = await store.insert(
                User(id=str(uuid.uuid4()), username=username, display_name=display_name)
            )

        logger.info("user_created", extra={"user.id": user.id})
        return user

    async def get(self, user_id: str) -> User:
        async with self._database.session() as session:
            user = await UserStore(session).get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def get_with_events(self, user_id: str) -> tuple[User, list[Event]]:
        async with self._database.session() as session:
            user = await UserStore(session).get(user_id)
            if user is None:
                raise NotFoundError("User not found")
            events = await EventStore(session).list_by_owner(user_id)
        return user, events

    async def list_events(self, user_id: str) -> list[Event]:
        """Events owned by the user.

        Unlike ``EventService.list_for_owner`` this distinguishes an unknown
        user from a user without events, though both are NotFound.
        """
        _, events = await self.get_with_events(user_id)
        if not events:
            raise NotFoundError("User has no scheduled events")
        return events

    async def update(self, user_id: str, patch: UserPatch) -> User:
        username = (
            _require_username(patch.username) if patch.username is not None else None
        )
        display_name = (
            _require_display_name(patch.display_name)
            if patch.display_name is not None
            else None
        )

        async with self._database.session() as session:
            store = UserStore(session)
            if username is not None:
                existing = await store.get_by_username(username)
                if existing is not None and existing.id != user_id:
                    raise ConflictError(f"Username '{username}' is already taken")
            user = await store.update_fields(
                user_id, username=username, display_name=display_name
            )
        if user is None:
            raise NotFoundError("User not found")

        logger.info("user_updated", extra={"user.id": user_id})
        return user

    async def delete(self, user_id: str) -> User:
        """Delete a user together with all of the user's events."""
        async with self._database.session() as session:
            store = UserStore(session)
            user = await store.get(user_id)
            if user is None:
                raise NotFoundError("User not found")
            await store.delete(user_id)

        logger.info("user_deleted", extra={"user.id": user_id})
        return user


def _require_username(username: str) -> str:
    text = username.strip()
    if len(text) < MIN_USERNAME_LENGTH:
        raise InvalidArgumentError(
            f"username must be at least {MIN_USERNAME_LENGTH} characters"
        )
    return text


def _require_display_name(display_name: str) -> str:
    text = display_name.strip()
    if not text:
        raise InvalidArgumentError("name must not be empty")
    return text
