"""
Background cleanup of expired notes and lapsed share links.

Reads already hide expired data, so the sweep only reclaims storage. Each
run is two independent set-based statements, safe to repeat at any time.
"""

import asyncio
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..exceptions import InternalError, ValidationError
from ..repositories.interfaces import INoteStore
from ..repositories.note_repository import NoteRepository
from ..timeutils import Clock, utc_now

logger = logging.getLogger(__name__)

StoreFactory = Callable[[AsyncSession], INoteStore]


@dataclass(frozen=True)
class SweepResult:
    shares_invalidated: int
    notes_deleted: int
    ran_at: datetime


def seconds_until_next_tick(now: datetime, interval_seconds: int) -> float:
    """Delay until the next wall-clock multiple of the interval (3600 -> top of the hour)."""
    ts = now.timestamp()
    next_tick = (math.floor(ts / interval_seconds) + 1) * interval_seconds
    return next_tick - ts


def next_deadline(previous: float, now: datetime, interval_seconds: int) -> float:
    """First tick after ``previous`` that is still ahead of ``now``; missed ticks are skipped."""
    deadline = previous + interval_seconds
    ts = now.timestamp()
    if deadline <= ts:
        deadline += (math.floor((ts - deadline) / interval_seconds) + 1) * interval_seconds
    return deadline


class CleanupScheduler:
    """Runs sweeps on a fixed wall-clock cadence inside one asyncio task."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        interval_seconds: int = 3600,
        clock: Clock = utc_now,
        store_factory: StoreFactory = NoteRepository,
    ):
        if interval_seconds < 1:
            raise ValueError("interval_seconds must be at least 1")
        self.session_factory = session_factory
        self.interval_seconds = interval_seconds
        self.clock = clock
        self.store_factory = store_factory

        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None
        self.last_result: Optional[SweepResult] = None
        self.last_error: Optional[str] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def sweep(self) -> SweepResult:
        """Invalidate lapsed shares, then purge expired notes."""
        now = self.clock()
        async with self.session_factory() as session:
            store = self.store_factory(session)
            shares_invalidated = await store.invalidate_expired_shares(now)
            notes_deleted = await store.delete_expired(now)

        result = SweepResult(
            shares_invalidated=shares_invalidated,
            notes_deleted=notes_deleted,
            ran_at=now,
        )
        self.last_result = result
        self.last_error = None
        logger.info(
            "Cleanup sweep finished",
            extra={"shares_invalidated": shares_invalidated, "notes_deleted": notes_deleted},
        )
        return result

    async def run_manual(self) -> SweepResult:
        """Sweep on demand; failures surface as InternalError."""
        logger.info("Manual cleanup requested")
        try:
            return await self.sweep()
        except Exception as exc:
            self.last_error = type(exc).__name__
            logger.exception("Manual cleanup failed")
            raise InternalError("Cleanup failed") from exc

    async def count_expiring_within(self, hours: int) -> int:
        """Stored notes expiring before now + hours, overdue ones included."""
        if hours < 0:
            raise ValidationError("hours cannot be negative")
        cutoff = self.clock() + timedelta(hours=hours)
        async with self.session_factory() as session:
            return await self.store_factory(session).count_expiring_before(cutoff)

    def start(self) -> None:
        if self.is_running:
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run(), name="noteguard-cleanup")
        logger.info("Cleanup scheduler started", extra={"interval_seconds": self.interval_seconds})

    async def stop(self) -> None:
        if self._task is None:
            return
        self._stop_event.set()
        try:
            await self._task
        finally:
            self._task = None
            logger.info("Cleanup scheduler stopped")

    def status(self) -> Dict[str, Any]:
        last = self.last_result
        return {
            "running": self.is_running,
            "interval_seconds": self.interval_seconds,
            "last_run_at": last.ran_at.isoformat() if last else None,
            "last_shares_invalidated": last.shares_invalidated if last else None,
            "last_notes_deleted": last.notes_deleted if last else None,
            "last_error": self.last_error,
        }

    async def _run(self) -> None:
        now = self.clock()
        deadline = now.timestamp() + seconds_until_next_tick(now, self.interval_seconds)
        while not self._stop_event.is_set():
            delay = max(deadline - self.clock().timestamp(), 0)
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=delay)
            except asyncio.TimeoutError:
                await self._scheduled_sweep()
                deadline = next_deadline(deadline, self.clock(), self.interval_seconds)

    async def _scheduled_sweep(self) -> None:
        try:
            await self.sweep()
        except Exception as exc:
            # next tick retries; the loop must survive
            self.last_error = type(exc).__name__
            logger.exception("Scheduled cleanup failed")
