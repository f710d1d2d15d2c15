from __future__ import annotations

import asyncio
import logging

from core.orchestrator import RefreshOrchestrator

log = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = 300


class Scheduler:
    """Periodic trigger for the refresh orchestrator.

    Refreshes once immediately, then every ``interval_seconds``. A cycle
    that blows up is logged and the loop carries on, so one bad tick
    never stops future refreshes.
    """

    def __init__(
        self,
        orchestrator: RefreshOrchestrator,
        interval_seconds: float = DEFAULT_REFRESH_INTERVAL,
    ) -> None:
        self._orchestrator = orchestrator
        self._interval = interval_seconds

    async def tick(self) -> None:
        try:
            await self._orchestrator.refresh()
        except Exception:
            log.exception("Scheduled refresh failed")

    async def run(self) -> None:
        """Loop forever; designed to be launched with ``asyncio.create_task``."""
        log.info("Scheduler started (interval=%ss)", self._interval)
        while True:
            await self.tick()
            await asyncio.sleep(self._interval)
