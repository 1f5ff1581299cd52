"""Tests for request boundary validation and wire formatting."""

from datetime import UTC, datetime

import pytest

from herald.errors import InvalidArgumentError
from herald.events.types import Event, EventStatus
from herald.server.schemas import event_to_response, format_timestamp
from herald.server.validation import parse_timestamp, parse_uuid, require_text


class TestParseUuid:
    def test_canonicalizes(self):
        value = "6F9619FF-8B86-D011-B42D-00C04FC964FF"

        assert parse_uuid(value, "user_id") == value.lower()

    @pytest.mark.parametrize("value", ["", "123", "not-a-uuid"])
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidArgumentError, match="user_id must be a valid UUID"):
            parse_uuid(value, "user_id")


class TestParseTimestamp:
    def test_zulu_suffix(self):
        assert parse_timestamp("2026-08-02T10:00:00.000Z", "execute_at") == datetime(
            2026, 8, 2, 10, 0, tzinfo=UTC
        )

    def test_offset_is_converted(self):
        parsed = parse_timestamp("2026-08-02T12:00:00+02:00", "execute_at")

        assert parsed == datetime(2026, 8, 2, 10, 0, tzinfo=UTC)
        assert parsed.tzinfo is UTC

    def test_naive_is_utc(self):
        assert parse_timestamp("2026-08-02T10:00:00", "execute_at").tzinfo is UTC

    @pytest.mark.parametrize("value", ["", "   ", "next tuesday", "2026-13-01T00:00:00"])
    def test_rejects_invalid(self, value):
        with pytest.raises(InvalidArgumentError, match="execute_at must be ISO 8601"):
            parse_timestamp(value, "execute_at")

    @pytest.mark.parametrize(
        "value", ["0001-01-01T00:30:00+01:00", "9999-12-31T23:59:59-05:00"]
    )
    def test_rejects_values_outside_utc_range(self, value):
        with pytest.raises(InvalidArgumentError, match="execute_at is out of range"):
            parse_timestamp(value, "execute_at")


class TestRequireText:
    def test_strips(self):
        assert require_text("  hello ", "event_name") == "hello"

    def test_rejects_blank(self):
        with pytest.raises(InvalidArgumentError, match="should not be empty"):
            require_text("   ", "event_name")

    def test_min_length(self):
        with pytest.raises(InvalidArgumentError, match="3 characters"):
            require_text("ab", "username", min_length=3)


class TestWireFormat:
    def test_format_timestamp(self):
        value = datetime(2026, 8, 2, 10, 0, 0, 123456, tzinfo=UTC)

        assert format_timestamp(value) == "2026-08-02T10:00:00.123Z"

    def test_event_to_response(self):
        scheduled = datetime(2026, 8, 2, 10, 0, tzinfo=UTC)
        executed = datetime(2026, 8, 2, 10, 0, 1, tzinfo=UTC)
        event = Event(
            id="e1",
            name="Deploy",
            scheduled_at=scheduled,
            status=EventStatus.EXECUTED,
            owner_id="u1",
            executed_at=executed,
        )

        response = event_to_response(event)

        assert response.model_dump(mode="json") == {
            "event_id": "e1",
            "event_name": "Deploy",
            "execute_at": "2026-08-02T10:00:00.000Z",
            "status": "executed",
            "executed_at": "2026-08-02T10:00:01.000Z",
            "user_id": "u1",
        }
