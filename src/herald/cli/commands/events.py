"""Event inspection commands."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, TypeVar

import typer

from herald.cli.console import console, create_table, dim, success, warning

if TYPE_CHECKING:
    from herald.db import Database

_T = TypeVar("_T")

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration file",
    ),
]


def format_countdown(scheduled_at: datetime, now: datetime | None = None) -> str:
    """Format how long until an event comes due."""
    now = now or datetime.now(UTC)
    if scheduled_at <= now:
        return "[green]due[/green]"

    total_seconds = int((scheduled_at - now).total_seconds())
    if total_seconds < 60:
        return f"in {total_seconds}s"

    total_minutes = total_seconds // 60
    if total_minutes < 60:
        return f"in {total_minutes}m"

    hours, minutes = divmod(total_minutes, 60)
    if hours < 24:
        return f"in {hours}h {minutes}m" if minutes else f"in {hours}h"

    days, hours = divmod(hours, 24)
    return f"in {days}d {hours}h" if hours else f"in {days}d"


def _with_database(
    config_path: Path | None, work: Callable[[Database], Awaitable[_T]]
) -> _T:
    from herald.cli.runtime import database_from_config
    from herald.config import load_config

    database = database_from_config(load_config(config_path))

    async def run() -> _T:
        await database.connect()
        try:
            return await work(database)
        finally:
            await database.disconnect()

    return asyncio.run(run())


def register(app: typer.Typer) -> None:
    """Register the events command group."""
    events_app = typer.Typer(help="Inspect and execute scheduled events")

    @events_app.command("pending")
    def events_pending(config: ConfigOption = None) -> None:
        """List pending events."""
        from herald.clock import SystemClock
        from herald.events.service import EventService

        pending = _with_database(
            config, lambda db: EventService(db, SystemClock()).list_pending()
        )
        if not pending:
            warning("No pending events")
            return

        table = create_table(
            "Pending Events",
            [
                ("ID", {"style": "dim", "no_wrap": True}),
                ("Name", ""),
                ("Execute At", "cyan"),
                ("Due", ""),
                ("User", "dim"),
            ],
        )
        now = datetime.now(UTC)
        for event in sorted(pending, key=lambda e: e.scheduled_at):
            table.add_row(
                event.id,
                event.name,
                event.scheduled_at.isoformat(),
                format_countdown(event.scheduled_at, now),
                event.owner_id,
            )
        console.print(table)
        dim(f"{len(pending)} pending")

    @events_app.command("tick")
    def events_tick(config: ConfigOption = None) -> None:
        """Run one scheduler tick now and report how many events executed."""
        from herald.clock import SystemClock
        from herald.events.scheduler import ExecutionScheduler

        result = _with_database(
            config, lambda db: ExecutionScheduler(db, SystemClock()).tick()
        )
        if result.executed:
            success(f"Executed {result.executed} event(s)")
        else:
            dim("No events due")

    app.add_typer(events_app, name="events")
