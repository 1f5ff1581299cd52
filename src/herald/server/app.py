"""FastAPI application for the Herald server."""

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from herald import __version__
from herald.clock import Clock, SystemClock
from herald.errors import HeraldError
from herald.events.service import EventService
from herald.server.routes import events, health, users
from herald.users.service import UserService

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from herald.db import Database
    from herald.events.scheduler import ExecutionScheduler

logger = logging.getLogger(__name__)


class HeraldServer:
    """Main server application.

    Owns the FastAPI app, the services behind it and, optionally, the
    execution scheduler whose lifetime follows the app's.
    """

    def __init__(
        self,
        database: "Database",
        clock: Clock | None = None,
        scheduler: "ExecutionScheduler | None" = None,
    ):
        self._database = database
        self._clock = clock or SystemClock()
        self._scheduler = scheduler
        self._event_service = EventService(database, self._clock)
        self._user_service = UserService(database)

        self._app = self._create_app()

    @property
    def app(self) -> FastAPI:
        return self._app

    @property
    def database(self) -> "Database":
        return self._database

    @property
    def scheduler(self) -> "ExecutionScheduler | None":
        return self._scheduler

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI app."""

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> "AsyncIterator[None]":
            logger.info("server_starting")
            await self._database.connect()
            if self._database.is_sqlite:
                await self._database.create_tables()
            if self._scheduler:
                await self._scheduler.start()

            yield

            logger.info("server_stopping")
            if self._scheduler:
                await self._scheduler.stop()
            await self._database.disconnect()

        app = FastAPI(
            title="Herald",
            description="Schedule named events and execute them when they come due",
            version=__version__,
            lifespan=lifespan,
        )

        app.state.server = self
        app.state.event_service = self._event_service
        app.state.user_service = self._user_service

        register_exception_handlers(app)

        app.include_router(health.router, tags=["health"])
        app.include_router(events.router, prefix="/events", tags=["events"])
        app.include_router(users.router, prefix="/users", tags=["users"])

        return app


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain and validation errors to HTTP responses."""

    @app.exception_handler(HeraldError)
    async def handle_domain_error(request: Request, exc: HeraldError) -> JSONResponse:
        logger.debug(
            "request_rejected",
            extra={
                "http.path": request.url.path,
                "http.status": exc.status_code,
                "error.message": exc.message,
            },
        )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [
            f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}"
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": messages}
        )


def create_app(
    database: "Database",
    clock: Clock | None = None,
    scheduler: "ExecutionScheduler | None" = None,
) -> FastAPI:
    """Create the FastAPI application."""
    return HeraldServer(database=database, clock=clock, scheduler=scheduler).app
