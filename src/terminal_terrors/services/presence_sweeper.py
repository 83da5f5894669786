"""Background reclamation of stale presence rows.

This module provides the PresenceSweepWorker class that deletes expired
heartbeat rows on a fixed interval, independent of request traffic. Request
handlers also sweep before listing online players; this worker only keeps the
table small when nobody is asking.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from terminal_terrors.core.errors import StorageFailureError
from terminal_terrors.core.settings import settings
from terminal_terrors.db.session import SessionLocal
from terminal_terrors.services.presence import PresenceTracker

logger = logging.getLogger(__name__)


class PresenceSweepWorker:
    """Periodically removes presence rows older than the presence window.

    A failed sweep is logged and the next one is still scheduled; presence is
    soft state, so the following run simply catches up.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session] | None = None,
        interval_seconds: float | None = None,
    ) -> None:
        """Initialize the sweep worker.

        Args:
            session_factory: Callable returning a new database session. Defaults
                to the application's SessionLocal.
            interval_seconds: Delay between sweeps. Defaults to
                PRESENCE_SWEEP_INTERVAL_SECONDS.
        """
        self._session_factory = session_factory or SessionLocal
        self.interval_seconds = max(
            0.01,
            float(
                interval_seconds
                if interval_seconds is not None
                else settings.presence_sweep_interval_seconds
            ),
        )
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()
        self.runs = 0
        self.failures = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the background sweep loop."""
        if not self.running:
            self._stopping.clear()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the background sweep loop."""
        if self._task is None:
            return

        self._stopping.set()
        await self._task
        self._task = None

    def run_once(self) -> int:
        """Sweep once with a fresh session and return the number of rows removed."""
        db = self._session_factory()
        try:
            return PresenceTracker(db).sweep()
        finally:
            db.close()

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass
            if self._stopping.is_set():
                return

            self.runs += 1
            try:
                removed = await asyncio.to_thread(self.run_once)
            except (StorageFailureError, SQLAlchemyError) as e:
                self.failures += 1
                logger.warning("Presence sweep failed: %s", e)
                continue
            except (OSError, ConnectionError, TimeoutError) as e:
                self.failures += 1
                logger.warning("Presence sweep encountered connection error: %s", e)
                continue
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                self.failures += 1
                logger.warning("Presence sweep hit unexpected data: %s", e, exc_info=True)
                continue

            if removed:
                logger.info("Presence sweep removed %d stale entries", removed)
