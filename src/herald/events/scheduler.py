"""Execution scheduler - polls for due events and marks them executed.

Each tick captures ``now`` once, selects PENDING events scheduled at or
before it, and flips exactly those ids to EXECUTED in one batch update with
``executed_at = now``. Ticks never overlap: the polling loop is sequential
and ``tick()`` itself is single-flight.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from herald.clock import Clock
from herald.db.engine import Database
from herald.events.store import EventStore

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_HEARTBEAT_EVERY = 300


class SchedulerState(StrEnum):
    """Where the scheduler is within a tick."""

    IDLE = "idle"
    SCANNING = "scanning"
    NONE_FOUND = "none_found"
    BATCH_UPDATING = "batch_updating"


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tick."""

    executed: int = 0
    skipped: bool = False
    now: datetime | None = None


class ExecutionScheduler:
    """Finalizes due events on a fixed interval.

    Example:
        scheduler = ExecutionScheduler(database, SystemClock(), poll_interval=1.0)
        await scheduler.start()
        ...
        await scheduler.stop()
    """

    def __init__(
        self,
        database: Database,
        clock: Clock,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        heartbeat_every: int = DEFAULT_HEARTBEAT_EVERY,
    ):
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if heartbeat_every < 1:
            raise ValueError("heartbeat_every must be at least 1")
        self._database = database
        self._clock = clock
        self._poll_interval = poll_interval
        self._heartbeat_every = heartbeat_every
        self._running = False
        self._task: asyncio.Task | None = None
        self._tick_lock = asyncio.Lock()
        self._state = SchedulerState.IDLE
        self._tick_count = 0

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def tick_count(self) -> int:
        return self._tick_count

    async def start(self) -> None:
        if self._running:
            return
        self._running = True
        logger.info(
            "scheduler_started", extra={"scheduler.poll_interval": self._poll_interval}
        )
        self._task = asyncio.create_task(self._poll_loop())

    async def stop(self) -> None:
        """Stop scheduling new ticks, letting an in-flight tick finish."""
        if not self._running:
            return
        self._running = False
        task, self._task = self._task, None
        if task is None:
            return
        # Wait out any running tick, then interrupt the sleep
        async with self._tick_lock:
            task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("scheduler_stopped", extra={"scheduler.ticks": self._tick_count})

    async def tick(self) -> TickResult:
        """Run one scan-and-finalize pass.

        Returns immediately with ``skipped=True`` if another tick is running.
        """
        if self._tick_lock.locked():
            logger.warning("scheduler_tick_skipped")
            return TickResult(skipped=True)

        async with self._tick_lock:
            self._tick_count += 1
            now = self._clock.now()
            try:
                async with self._database.session() as session:
                    store = EventStore(session)

                    self._state = SchedulerState.SCANNING
                    due = await store.list_due(now)
                    if not due:
                        self._state = SchedulerState.NONE_FOUND
                        logger.debug("scheduler_no_due_events")
                        return TickResult(executed=0, now=now)

                    self._state = SchedulerState.BATCH_UPDATING
                    executed = await store.mark_executed([e.id for e in due], now)
            finally:
                self._state = SchedulerState.IDLE

        logger.info(
            "events_executed",
            extra={
                "tick.found": len(due),
                "tick.executed": executed,
                "tick.now": now.isoformat(),
            },
        )
        return TickResult(executed=executed, now=now)

    async def _poll_loop(self) -> None:
        iterations = 0
        while self._running:
            iterations += 1
            started = time.monotonic()
            try:
                await self.tick()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                # Events stay PENDING and are picked up by the next tick
                logger.error(
                    "scheduler_tick_failed",
                    extra={"error.type": type(e).__name__, "error.message": str(e)},
                )

            if iterations % self._heartbeat_every == 0:
                logger.info(
                    "scheduler_heartbeat", extra={"scheduler.ticks": self._tick_count}
                )

            elapsed = time.monotonic() - started
            await asyncio.sleep(max(0.0, self._poll_interval - elapsed))
