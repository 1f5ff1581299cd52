"""Database management commands.

Provides commands for:
- init: create tables directly from the ORM models
- migrate / rollback / status: manage Alembic schema migrations
"""

from __future__ import annotations

import asyncio
import subprocess
import sys
from pathlib import Path
from typing import Annotated

import typer

from herald.cli.console import console, error, success


def _run_alembic(*args: str) -> int:
    result = subprocess.run(
        [sys.executable, "-m", "alembic", *args],
        capture_output=False,
    )
    return result.returncode


def register(app: typer.Typer) -> None:
    """Register the db command group."""
    db_app = typer.Typer(help="Database management commands")

    @db_app.command("init")
    def db_init(
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
    ) -> None:
        """Create any missing tables from the ORM models."""
        from herald.cli.runtime import database_from_config
        from herald.config import load_config

        database = database_from_config(load_config(config_path))

        async def create() -> None:
            await database.connect()
            try:
                await database.create_tables()
            finally:
                await database.disconnect()

        asyncio.run(create())
        success("Tables created")

    @db_app.command("migrate")
    def db_migrate(
        revision: Annotated[
            str,
            typer.Option(
                "--revision",
                "-r",
                help="Target revision",
            ),
        ] = "head",
    ) -> None:
        """Run database migrations."""
        console.print(f"[bold]Running migrations to {revision}...[/bold]")
        if _run_alembic("upgrade", revision) == 0:
            success("Migrations completed successfully")
        else:
            error("Migration failed")
            raise typer.Exit(1)

    @db_app.command("rollback")
    def db_rollback(
        revision: Annotated[
            str,
            typer.Option(
                "--revision",
                "-r",
                help="Target revision",
            ),
        ] = "-1",
    ) -> None:
        """Rollback database migrations."""
        console.print(f"[bold]Rolling back to {revision}...[/bold]")
        if _run_alembic("downgrade", revision) == 0:
            success("Rollback completed successfully")
        else:
            error("Rollback failed")
            raise typer.Exit(1)

    @db_app.command("status")
    def db_status() -> None:
        """Show migration status."""
        console.print("[bold]Migration status:[/bold]")
        _run_alembic("current")
        console.print("\n[bold]Migration history:[/bold]")
        _run_alembic("history", "--indicate-current")

    app.add_typer(db_app, name="db")
