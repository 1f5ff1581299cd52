"""Event routes: schedule, list, update and delete events."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from herald.events.service import EventService
from herald.events.types import EventPatch
from herald.server.schemas import (
    EventResponse,
    ScheduleEventRequest,
    UpdateEventRequest,
    event_to_response,
)
from herald.server.validation import parse_timestamp, parse_uuid, require_text

router = APIRouter()


def get_event_service(request: Request) -> EventService:
    return request.app.state.event_service


EventServiceDep = Annotated[EventService, Depends(get_event_service)]


@router.post(
    "/schedule",
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "User not found"}, 400: {"description": "Invalid request"}},
)
async def schedule_event(
    body: ScheduleEventRequest, service: EventServiceDep
) -> EventResponse:
    """Schedule a new event for a user."""
    event = await service.create(
        owner_id=parse_uuid(body.user_id, "user_id"),
        name=require_text(body.event_name, "event_name"),
        scheduled_at=parse_timestamp(body.execute_at, "execute_at"),
    )
    return event_to_response(event)


@router.get("/pending")
async def list_pending_events(service: EventServiceDep) -> list[EventResponse]:
    """List every event that has not been executed yet."""
    return [event_to_response(e) for e in await service.list_pending()]


@router.get(
    "/user/{user_id}",
    responses={404: {"description": "User has no scheduled events"}},
)
async def list_user_events(
    user_id: str, service: EventServiceDep
) -> list[EventResponse]:
    """List all events for a user, in any status."""
    events = await service.list_for_owner(parse_uuid(user_id, "user_id"))
    return [event_to_response(e) for e in events]


@router.get("/{event_id}", responses={404: {"description": "Event not found"}})
async def get_event(event_id: str, service: EventServiceDep) -> EventResponse:
    """Look up a single event."""
    return event_to_response(await service.get(parse_uuid(event_id, "event_id")))


@router.patch(
    "/{event_id}",
    responses={
        404: {"description": "Event not found"},
        400: {"description": "Only pending events can be updated"},
    },
)
async def update_event(
    event_id: str, body: UpdateEventRequest, service: EventServiceDep
) -> EventResponse:
    """Update the name and/or scheduled time of a pending event."""
    patch = EventPatch(
        name=require_text(body.event_name, "event_name")
        if body.event_name is not None
        else None,
        scheduled_at=parse_timestamp(body.execute_at, "execute_at")
        if body.execute_at is not None
        else None,
    )
    event = await service.update(parse_uuid(event_id, "event_id"), patch)
    return event_to_response(event)


@router.delete(
    "/{event_id}",
    responses={
        404: {"description": "Event not found"},
        400: {"description": "Only pending events can be deleted"},
    },
)
async def delete_event(event_id: str, service: EventServiceDep) -> EventResponse:
    """Delete a pending event and return its last state."""
    return event_to_response(await service.delete(parse_uuid(event_id, "event_id")))
