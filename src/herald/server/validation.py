"""Explicit validation applied to inbound requests before the services run.

Each function either returns the sanitized value or raises
InvalidArgumentError, which the app turns into a 400.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from herald.clock import ensure_utc
from herald.errors import InvalidArgumentError


def parse_uuid(value: str, field: str) -> str:
    """Return ``value`` as a canonical UUID string."""
    try:
        return str(uuid.UUID(value))
    except (ValueError, AttributeError, TypeError) as e:
        raise InvalidArgumentError(f"{field} must be a valid UUID") from e


def parse_timestamp(value: str, field: str) -> datetime:
    """Parse an ISO-8601 string into an aware UTC datetime.

    Values without an offset are taken as UTC.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{field} must be ISO 8601")
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as e:
        raise InvalidArgumentError(f"{field} must be ISO 8601") from e
    try:
        return ensure_utc(parsed)
    except OverflowError as e:
        raise InvalidArgumentError(f"{field} is out of range") from e


def require_text(value: str, field: str, min_length: int = 1) -> str:
    """Strip ``value`` and require at least ``min_length`` characters."""
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise InvalidArgumentError(f"{field} should not be empty")
    if len(text) < min_length:
        raise InvalidArgumentError(
            f"{field} must be longer than or equal to {min_length} characters"
        )
    return text
