"""Periodic removal of expired login sessions."""

import asyncio
import contextlib
import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from forum.crud.session import crud_session
from forum.database import SessionLocal

logger = logging.getLogger(__name__)


def sweep_expired_sessions() -> int:
    """Delete expired sessions in a fresh database session and return how many were removed."""
    with SessionLocal() as db:
        return crud_session.clean_expired(db)


class SessionSweeper:
    """Background task that runs :func:`sweep_expired_sessions` on an interval."""

    def __init__(self, interval_seconds: int):
        self.interval_seconds = max(1, interval_seconds)
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            logger.warning("[SESSIONS] Sweeper already running")
            return
        self._task = asyncio.create_task(self._run(), name="session_sweeper")
        logger.info("[SESSIONS] Sweeper started (every %ss)", self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("[SESSIONS] Sweeper stopped")

    async def run_once(self) -> int:
        removed = await run_in_threadpool(sweep_expired_sessions)
        if removed:
            logger.info("[SESSIONS] Removed %d expired sessions", removed)
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("[SESSIONS] Expired session sweep failed")
