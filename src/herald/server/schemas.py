"""Request and response models for the HTTP API.

Request models only check shape (required keys, string types). Semantic
checks live in ``herald.server.validation``. Responses are built from the
domain types by the ``*_to_response`` functions below.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from herald.events.types import Event, EventStatus
from herald.users.types import User


class ScheduleEventRequest(BaseModel):
    """Body of ``POST /events/schedule``."""

    model_config = ConfigDict(extra="ignore")

    user_id: str = Field(description="The UUID of the user scheduling the event.")
    event_name: str = Field(description="A descriptive name for the event.")
    execute_at: str = Field(
        description="The future time to execute the event (ISO 8601).",
        examples=["2026-08-02T10:00:00.000Z"],
    )


class UpdateEventRequest(BaseModel):
    """Body of ``PATCH /events/{event_id}``."""

    model_config = ConfigDict(extra="ignore")

    event_name: str | None = None
    execute_at: str | None = None


class EventResponse(BaseModel):
    """Wire representation of an event."""

    event_id: str
    event_name: str
    execute_at: str
    status: EventStatus
    executed_at: str | None
    user_id: str


class CreateUserRequest(BaseModel):
    """Body of ``POST /users``."""

    model_config = ConfigDict(extra="ignore")

    username: str = Field(description="The user's unique username.", examples=["johndoe"])
    name: str = Field(description="The user's full name.", examples=["John Doe"])


class UpdateUserRequest(BaseModel):
    """Body of ``PATCH /users/{user_id}``."""

    model_config = ConfigDict(extra="ignore")

    username: str | None = None
    name: str | None = None


class UserResponse(BaseModel):
    """Wire representation of a user."""

    user_id: str
    username: str
    name: str
    events: list[EventResponse] | None = None


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def event_to_response(event: Event) -> EventResponse:
    return EventResponse(
        event_id=event.id,
        event_name=event.name,
        execute_at=format_timestamp(event.scheduled_at),
        status=event.status,
        executed_at=format_timestamp(event.executed_at) if event.executed_at else None,
        user_id=event.owner_id,
    )


def user_to_response(user: User, events: list[Event] | None = None) -> UserResponse:
    return UserResponse(
        user_id=user.id,
        username=user.username,
        name=user.display_name,
        events=[event_to_response(e) for e in events] if events is not None else None,
    )
