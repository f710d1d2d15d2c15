from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable

from core.cache import StatusCache
from core.registry import ProviderRegistry
from models.status import CacheEntry, ProviderStatus

if TYPE_CHECKING:
    from providers.base import StatusProvider

log = logging.getLogger(__name__)

DEFAULT_CONCURRENCY_LIMIT = 10


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RefreshOrchestrator:
    """Runs one refresh cycle across every registered provider.

    Providers are fetched concurrently and each outcome is isolated: a
    success is published to the cache with a fresh timestamp, a failure
    is logged and leaves that provider's previous entry untouched.

    Overlapping triggers (the scheduled tick and an on-demand refresh)
    are coalesced: while a cycle is in flight, further ``refresh()`` calls
    wait for that same cycle instead of starting another one.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        cache: StatusCache,
        concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._registry = registry
        self._cache = cache
        self._semaphore = asyncio.Semaphore(concurrency_limit)
        self._clock = clock
        self._inflight: asyncio.Task[dict[str, CacheEntry]] | None = None

    @property
    def in_progress(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def refresh(self) -> dict[str, CacheEntry]:
        """Run (or join) a refresh cycle and return the resulting cache snapshot."""
        if not self.in_progress:
            self._inflight = asyncio.create_task(self._run_cycle(), name="refresh-cycle")
        # Shielded so a caller that gives up does not cancel the shared cycle.
        return await asyncio.shield(self._inflight)

    async def aclose(self) -> None:
        """Cancel the in-flight cycle, if any, and wait for it to unwind."""
        if not self.in_progress:
            return
        self._inflight.cancel()
        with suppress(asyncio.CancelledError):
            await self._inflight

    async def _run_cycle(self) -> dict[str, CacheEntry]:
        providers = self._registry.providers
        log.info("Refreshing %d provider(s)", len(providers))

        results = await asyncio.gather(*(self._fetch(p) for p in providers))

        refreshed = 0
        for provider, status in zip(providers, results):
            if status is None:
                continue
            self._cache.publish(provider.key, status, self._clock())
            refreshed += 1

        log.info("Refresh complete: %d/%d provider(s) updated", refreshed, len(providers))
        return self._cache.snapshot()

    async def _fetch(self, provider: StatusProvider) -> ProviderStatus | None:
        async with self._semaphore:
            try:
                return await provider.fetch_status()
            except Exception as exc:
                log.exception("Provider %s refresh failed: %s", provider.name, exc)
                return None
