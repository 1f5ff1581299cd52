"""Server command for running the Herald API and scheduler."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

logger = logging.getLogger(__name__)


def register(app: typer.Typer) -> None:
    """Register the serve command."""

    @app.command()
    def serve(
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
        host: Annotated[
            str | None,
            typer.Option(
                "--host",
                "-h",
                help="Host to bind to (overrides config)",
            ),
        ] = None,
        port: Annotated[
            int | None,
            typer.Option(
                "--port",
                "-p",
                help="Port to bind to (overrides config)",
            ),
        ] = None,
        scheduler: Annotated[
            bool,
            typer.Option(
                "--scheduler/--no-scheduler",
                help="Run the execution scheduler alongside the API",
            ),
        ] = True,
    ) -> None:
        """Start the Herald server."""
        try:
            asyncio.run(_run_server(config, host, port, scheduler))
        except KeyboardInterrupt:
            # Use print here since logging may not be configured yet
            print("\nServer stopped")


async def _run_server(
    config_path: Path | None = None,
    host: str | None = None,
    port: int | None = None,
    with_scheduler: bool = True,
) -> None:
    """Run the server asynchronously."""
    from herald.cli.runtime import database_from_config
    from herald.clock import SystemClock
    from herald.config import load_config
    from herald.events.scheduler import ExecutionScheduler
    from herald.logging import configure_logging
    from herald.server import ServerRunner, create_app

    herald_config = load_config(config_path)
    configure_logging(
        level=herald_config.logging.level,
        use_rich=True,
        log_to_file=herald_config.logging.log_to_file,
    )

    database = database_from_config(herald_config)
    clock = SystemClock()

    execution_scheduler = None
    if with_scheduler and herald_config.scheduler.enabled:
        execution_scheduler = ExecutionScheduler(
            database,
            clock,
            poll_interval=herald_config.scheduler.poll_interval,
            heartbeat_every=herald_config.scheduler.heartbeat_every,
        )
    else:
        logger.info("scheduler_disabled")

    fastapi_app = create_app(database, clock=clock, scheduler=execution_scheduler)

    runner = ServerRunner(
        fastapi_app,
        host=host or herald_config.server.host,
        port=port or herald_config.server.port,
    )
    await runner.run()
