"""Background sweep that evicts expired quota entries.

Admission decisions never depend on the janitor: an expired entry is
already treated as a fresh window on its next access. The sweep only keeps
the ledger from growing with identities that never come back.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Optional

from geo_backend.quota.engine import QuotaEngine

LOG = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL_SECONDS = 3600.0


class QuotaJanitor:
    """Periodically run :meth:`QuotaEngine.sweep_expired` on the event loop."""

    def __init__(self, engine: QuotaEngine, interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.engine = engine
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self, now: Optional[datetime] = None) -> int:
        removed = self.engine.sweep_expired(now)
        if removed:
            LOG.info("quota_janitor: evicted %d expired entries (%d left)", removed, len(self.engine.ledger))
        else:
            LOG.debug("quota_janitor: nothing to evict")
        return removed

    async def run(self) -> None:
        while True:
            try:
                await asyncio.sleep(self.interval_seconds)
            except asyncio.CancelledError:
                LOG.info("quota_janitor: sweep loop cancelled")
                break
            try:
                self.run_once()
            except Exception:
                LOG.exception("quota_janitor: sweep failed")

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self.run())
        LOG.info("quota_janitor: started interval=%ss", self.interval_seconds)

    async def stop(self) -> None:
        task = self._task
        if task is None:
            return
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        self._task = None
        LOG.info("quota_janitor: stopped")


__all__ = ["QuotaJanitor", "DEFAULT_SWEEP_INTERVAL_SECONDS"]
