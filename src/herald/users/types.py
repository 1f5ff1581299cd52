"""User domain types."""

from __future__ import annotations

from dataclasses import dataclass

MIN_USERNAME_LENGTH = 3


@dataclass(frozen=True)
class User:
    """An event owner."""

    id: str
    username: str
    display_name: str


@dataclass(frozen=True)
class UserPatch:
    """Fields to change on a user. ``None`` leaves a field as is."""

    username: str | None = None
    display_name: str | None = None
