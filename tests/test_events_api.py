"""HTTP tests for the events routes."""

import uuid

import pytest


@pytest.fixture
async def user_id(client) -> str:
    response = await client.post("/users", json={"username": "alice", "name": "Alice"})
    assert response.status_code == 201
    return response.json()["user_id"]


async def _schedule(client, user_id: str, execute_at: str, name: str = "Standup"):
    return await client.post(
        "/events/schedule",
        json={"user_id": user_id, "event_name": name, "execute_at": execute_at},
    )


class TestSchedule:
    async def test_schedule_returns_pending_event(self, client, user_id):
        response = await _schedule(client, user_id, "2026-01-01T13:00:00.000Z")

        assert response.status_code == 201
        body = response.json()
        assert body["event_name"] == "Standup"
        assert body["execute_at"] == "2026-01-01T13:00:00.000Z"
        assert body["status"] == "pending"
        assert body["executed_at"] is None
        assert body["user_id"] == user_id
        assert uuid.UUID(body["event_id"])

    async def test_offset_is_normalized_to_utc(self, client, user_id):
        response = await _schedule(client, user_id, "2026-01-01T15:30:00+02:00")

        assert response.status_code == 201
        assert response.json()["execute_at"] == "2026-01-01T13:30:00.000Z"

    async def test_past_time_is_rejected(self, client, user_id):
        response = await _schedule(client, user_id, "2026-01-01T11:59:59Z")

        assert response.status_code == 400
        assert response.json()["detail"] == "execute_at must be a future date"

    async def test_unparseable_time_is_rejected(self, client, user_id):
        response = await _schedule(client, user_id, "tomorrow at noon")

        assert response.status_code == 400
        assert "ISO 8601" in response.json()["detail"]

    @pytest.mark.parametrize(
        "execute_at", ["0001-01-01T00:30:00+01:00", "9999-12-31T23:59:59-05:00"]
    )
    async def test_time_outside_utc_range_is_rejected(self, client, user_id, execute_at):
        response = await _schedule(client, user_id, execute_at)

        assert response.status_code == 400
        assert response.json()["detail"] == "execute_at is out of range"

    async def test_patch_with_time_outside_utc_range_is_rejected(self, client, user_id):
        event_id = (await _schedule(client, user_id, "2026-01-01T13:00:00Z")).json()[
            "event_id"
        ]

        response = await client.patch(
            f"/events/{event_id}", json={"execute_at": "9999-12-31T23:59:59-05:00"}
        )

        assert response.status_code == 400

    async def test_invalid_user_id_is_rejected(self, client):
        response = await _schedule(client, "not-a-uuid", "2026-01-02T00:00:00Z")

        assert response.status_code == 400
        assert response.json()["detail"] == "user_id must be a valid UUID"

    async def test_unknown_user(self, client):
        response = await _schedule(client, str(uuid.uuid4()), "2026-01-02T00:00:00Z")

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    async def test_blank_name_is_rejected(self, client, user_id):
        response = await _schedule(client, user_id, "2026-01-02T00:00:00Z", name="  ")

        assert response.status_code == 400

    async def test_missing_fields_are_rejected(self, client):
        response = await client.post("/events/schedule", json={"event_name": "x"})

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert isinstance(detail, list)
        assert any(message.startswith("user_id") for message in detail)
        assert any(message.startswith("execute_at") for message in detail)


class TestExecutionFlow:
    async def test_scheduled_event_is_executed_after_its_time(
        self, client, user_id, clock, scheduler
    ):
        created = (await _schedule(client, user_id, "2026-01-01T13:00:00Z")).json()
        event_id = created["event_id"]

        pending = (await client.get("/events/pending")).json()
        assert [e["event_id"] for e in pending] == [event_id]

        clock.advance(hours=1, minutes=5)
        result = await scheduler.tick()
        assert result.executed == 1

        assert (await client.get("/events/pending")).json() == []
        response = await client.get(f"/events/{event_id}")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "executed"
        assert body["executed_at"] == "2026-01-01T13:05:00.000Z"
        assert body["execute_at"] == "2026-01-01T13:00:00.000Z"

    async def test_executed_event_cannot_be_patched(
        self, client, user_id, clock, scheduler
    ):
        event_id = (await _schedule(client, user_id, "2026-01-01T12:00:01Z")).json()[
            "event_id"
        ]
        clock.advance(seconds=1)
        await scheduler.tick()

        response = await client.patch(f"/events/{event_id}", json={"event_name": "Late"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Only pending events can be updated"
        assert (await client.get(f"/events/{event_id}")).json()["event_name"] == "Standup"

    async def test_executed_event_cannot_be_deleted(
        self, client, user_id, clock, scheduler
    ):
        event_id = (await _schedule(client, user_id, "2026-01-01T12:00:01Z")).json()[
            "event_id"
        ]
        clock.advance(minutes=1)
        await scheduler.tick()

        response = await client.delete(f"/events/{event_id}")

        assert response.status_code == 400
        assert response.json()["detail"] == "Only pending events can be deleted"


class TestLookupAndMutation:
    async def test_user_events_include_every_status(
        self, client, user_id, clock, scheduler
    ):
        await _schedule(client, user_id, "2026-01-01T12:30:00Z", name="First")
        await _schedule(client, user_id, "2026-01-02T12:00:00Z", name="Second")
        clock.advance(hours=1)
        await scheduler.tick()

        response = await client.get(f"/events/user/{user_id}")

        assert response.status_code == 200
        statuses = {e["event_name"]: e["status"] for e in response.json()}
        assert statuses == {"First": "executed", "Second": "pending"}

    async def test_user_without_events(self, client, user_id):
        response = await client.get(f"/events/user/{user_id}")

        assert response.status_code == 404
        assert response.json()["detail"] == "User has no scheduled events"

    async def test_unknown_event(self, client):
        response = await client.get(f"/events/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["detail"] == "Event not found"

    async def test_invalid_event_id(self, client):
        response = await client.get("/events/123")

        assert response.status_code == 400

    async def test_patch_pending_event(self, client, user_id):
        event_id = (await _schedule(client, user_id, "2026-01-01T13:00:00Z")).json()[
            "event_id"
        ]

        response = await client.patch(
            f"/events/{event_id}",
            json={"event_name": "Retro", "execute_at": "2026-01-03T09:00:00Z"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["event_name"] == "Retro"
        assert body["execute_at"] == "2026-01-03T09:00:00.000Z"
        assert body["status"] == "pending"

    async def test_delete_pending_event(self, client, user_id):
        event_id = (await _schedule(client, user_id, "2026-01-01T13:00:00Z")).json()[
            "event_id"
        ]

        response = await client.delete(f"/events/{event_id}")

        assert response.status_code == 200
        assert response.json()["event_id"] == event_id
        assert (await client.get(f"/events/{event_id}")).status_code == 404


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_ready(self, client):
        response = await client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ready",
            "database": "connected",
            "scheduler": "disabled",
        }
