"""Overdue sweeper: asyncio daemon that flags past-due payments."""

import asyncio
import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import date, datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities import DictionaryKind, PaymentStatus

logger = logging.getLogger(__name__)

# Polling interval in seconds
DEFAULT_INTERVAL = 60


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class OverdueSweeper:
    """Periodically flips unpaid, past-due ``Pending`` payments to ``Overdue``.

    Runs as an asyncio.Task inside FastAPI's lifespan. Every tick opens its
    own database session and commits the bulk update; a failing tick is
    logged and the loop keeps going.
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
        interval_seconds: int = DEFAULT_INTERVAL,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self._session_factory = session_factory
        self._interval = max(interval_seconds, 1)
        self._today = today
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the sweep loop."""
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.info("OverdueSweeper started (every %ss)", self._interval)

    async def stop(self) -> None:
        """Gracefully stop the sweep loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("OverdueSweeper stopped")

    async def run_once(self) -> int:
        """Run a single sweep; returns the number of payments flagged."""
        from app.infrastructure.database.repositories import (
            SQLAlchemyDictionaryRepository,
            SQLAlchemyPaymentRepository,
        )

        async with self._session_factory() as session:
            try:
                status = await SQLAlchemyDictionaryRepository(session).find_by_name(
                    DictionaryKind.PAYMENT_STATUSES, PaymentStatus.OVERDUE.value
                )
                affected = await SQLAlchemyPaymentRepository(session).mark_overdue(
                    self._today(), status.id if status else None
                )
                await session.commit()
            except Exception:
                await session.rollback()
                raise

        if affected:
            logger.info("Marked %d payment(s) overdue", affected)
        return affected

    async def _loop(self) -> None:
        """Main loop: sweep, then sleep for the configured interval."""
        while self._running:
            try:
                await self.run_once()
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("OverdueSweeper tick failed")

            await asyncio.sleep(self._interval)
