"""Shared test fixtures and factories."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import httpx
import pytest

from herald.db.engine import Database
from herald.events.scheduler import ExecutionScheduler
from herald.events.service import EventService
from herald.server.app import create_app
from herald.users.service import UserService
from herald.users.types import User

START = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = START):
        self._now = start

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs: float) -> datetime:
        self._now += timedelta(**kwargs)
        return self._now

    def set(self, value: datetime) -> None:
        self._now = value


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def config_toml_content() -> str:
    """Valid TOML config content."""
    return """
[server]
host = "0.0.0.0"
port = 9000

[database]
url = "sqlite+aiosqlite:///:memory:"

[scheduler]
poll_interval = 0.5
heartbeat_every = 10

[logging]
level = "DEBUG"
"""


@pytest.fixture
def config_file(tmp_path: Path, config_toml_content: str) -> Path:
    """Create a temporary config file."""
    config_path = tmp_path / "config.toml"
    config_path.write_text(config_toml_content)
    return config_path


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """Create a temporary test database."""
    db = Database(database_path=tmp_path / "test.db")
    await db.connect()
    await db.create_tables()

    yield db

    await db.disconnect()


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def event_service(database: Database, clock: FakeClock) -> EventService:
    return EventService(database, clock)


@pytest.fixture
def user_service(database: Database) -> UserService:
    return UserService(database)


@pytest.fixture
def scheduler(database: Database, clock: FakeClock) -> ExecutionScheduler:
    return ExecutionScheduler(database, clock, poll_interval=0.01)


@pytest.fixture
async def user(user_service: UserService) -> User:
    return await user_service.create("alice", "Alice Example")


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
async def client(
    database: Database, clock: FakeClock
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client bound to the app.

    ASGITransport does not run the lifespan, so the database fixture
    provides the connected schema and no scheduler is attached.
    """
    app = create_app(database, clock=clock)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1"})
