"""User routes. Deleting a user also deletes the user's events."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from herald.server.schemas import (
    CreateUserRequest,
    EventResponse,
    UpdateUserRequest,
    UserResponse,
    event_to_response,
    user_to_response,
)
from herald.server.validation import parse_uuid, require_text
from herald.users.service import UserService
from herald.users.types import MIN_USERNAME_LENGTH, UserPatch

router = APIRouter()


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model_exclude_none=True,
    responses={409: {"description": "Username already taken"}},
)
async def create_user(body: CreateUserRequest, service: UserServiceDep) -> UserResponse:
    """Create a user."""
    user = await service.create(
        username=require_text(body.username, "username", MIN_USERNAME_LENGTH),
        display_name=require_text(body.name, "name"),
    )
    return user_to_response(user)


@router.get("/{user_id}", responses={404: {"description": "User not found"}})
async def get_user(user_id: str, service: UserServiceDep) -> UserResponse:
    """Look up a user along with the user's events."""
    user, events = await service.get_with_events(parse_uuid(user_id, "user_id"))
    return user_to_response(user, events)


@router.get(
    "/{user_id}/events",
    responses={404: {"description": "User not found or has no scheduled events"}},
)
async def list_user_events(user_id: str, service: UserServiceDep) -> list[EventResponse]:
    """List all events owned by a user."""
    events = await service.list_events(parse_uuid(user_id, "user_id"))
    return [event_to_response(e) for e in events]


@router.patch(
    "/{user_id}",
    response_model_exclude_none=True,
    responses={404: {"description": "User not found"}},
)
async def update_user(
    user_id: str, body: UpdateUserRequest, service: UserServiceDep
) -> UserResponse:
    """Change a user's username and/or name."""
    patch = UserPatch(
        username=require_text(body.username, "username", MIN_USERNAME_LENGTH)
        if body.username is not None
        else None,
        display_name=require_text(body.name, "name") if body.name is not None else None,
    )
    user = await service.update(parse_uuid(user_id, "user_id"), patch)
    return user_to_response(user)


@router.delete(
    "/{user_id}",
    response_model_exclude_none=True,
    responses={404: {"description": "User not found"}},
)
async def delete_user(user_id: str, service: UserServiceDep) -> UserResponse:
    """Delete a user and every event the user owns."""
    user = await service.delete(parse_uuid(user_id, "user_id"))
    return user_to_response(user)
