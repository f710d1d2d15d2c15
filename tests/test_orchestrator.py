"""Refresh cycle: concurrency, failure isolation, single-flight, cache publish."""

import asyncio
from contextlib import suppress
from datetime import datetime, timezone

import pytest

from core.cache import StatusCache
from core.orchestrator import RefreshOrchestrator
from core.registry import ProviderRegistry
from core.scheduler import Scheduler
from models.status import CacheEntry, ServiceStatus
from tests.helpers import make_status

T0 = datetime(2025, 10, 1, tzinfo=timezone.utc)
T1 = datetime(2025, 10, 2, tzinfo=timezone.utc)


class StubProvider:
    def __init__(self, key: str, name: str, error: Exception | None = None, delay: float = 0.0) -> None:
        self.key = key
        self.name = name
        self.error = error
        self.delay = delay
        self.calls = 0
        self.running = 0
        self.peak = 0

    async def fetch_status(self):
        self.calls += 1
        self.running += 1
        self.peak = max(self.peak, self.running)
        try:
            await asyncio.sleep(self.delay)
            if self.error is not None:
                raise self.error
            return make_status(self.name, [ServiceStatus.OPERATIONAL, ServiceStatus.DEGRADED])
        finally:
            self.running -= 1


def build(*providers: StubProvider) -> tuple[RefreshOrchestrator, StatusCache]:
    registry = ProviderRegistry()
    for provider in providers:
        registry.register(provider)
    cache = StatusCache(registry.keys)
    return RefreshOrchestrator(registry, cache, clock=lambda: T1), cache


def test_cache_starts_empty() -> None:
    cache = StatusCache(["aws", "azure", "gcp"])
    assert cache.snapshot() == {key: CacheEntry(None, None) for key in ("aws", "azure", "gcp")}
    assert cache.get("aws").to_dict() == {"status": None, "lastUpdated": None}


def test_cache_rejects_unknown_provider() -> None:
    cache = StatusCache(["aws"])
    with pytest.raises(KeyError):
        cache.get("oracle")
    with pytest.raises(KeyError):
        cache.publish("oracle", make_status("Oracle", []), T0)


def test_registry_rejects_duplicate_keys() -> None:
    registry = ProviderRegistry()
    registry.register(StubProvider("aws", "AWS"))
    with pytest.raises(ValueError):
        registry.register(StubProvider("aws", "AWS again"))


def test_refresh_publishes_every_success() -> None:
    orchestrator, cache = build(StubProvider("aws", "AWS"), StubProvider("gcp", "GCP"))

    snapshot = asyncio.run(orchestrator.refresh())

    assert set(snapshot) == {"aws", "gcp"}
    assert snapshot["aws"].status.provider == "AWS"
    assert snapshot["aws"].last_updated == T1
    assert cache.get("gcp").status.overall_status is ServiceStatus.DEGRADED


def test_failed_provider_keeps_previous_entry() -> None:
    aws = StubProvider("aws", "AWS", error=RuntimeError("upstream exploded"))
    orchestrator, cache = build(aws, StubProvider("azure", "Azure"), StubProvider("gcp", "GCP"))
    previous = cache.publish("aws", make_status("AWS", [ServiceStatus.DISRUPTION]), T0)

    asyncio.run(orchestrator.refresh())

    assert cache.get("aws") is previous
    assert cache.get("aws").last_updated == T0
    assert cache.get("azure").last_updated == T1
    assert cache.get("gcp").last_updated == T1


def test_all_providers_failing_leaves_cache_empty(caplog: pytest.LogCaptureFixture) -> None:
    orchestrator, cache = build(
        StubProvider("aws", "AWS", error=RuntimeError("down")),
        StubProvider("gcp", "GCP", error=TimeoutError()),
    )

    snapshot = asyncio.run(orchestrator.refresh())

    assert all(entry == CacheEntry() for entry in snapshot.values())
    assert "Provider AWS refresh failed: down" in caplog.text
    assert "Provider GCP refresh failed" in caplog.text


def test_providers_are_fetched_concurrently() -> None:
    providers = [StubProvider(key, key.upper(), delay=0.05) for key in ("aws", "azure", "gcp")]
    orchestrator, _ = build(*providers)

    async def go() -> float:
        loop = asyncio.get_running_loop()
        start = loop.time()
        await orchestrator.refresh()
        return loop.time() - start

    elapsed = asyncio.run(go())
    assert elapsed < 0.14


def test_overlapping_refreshes_share_one_cycle() -> None:
    aws = StubProvider("aws", "AWS", delay=0.02)
    orchestrator, _ = build(aws)

    async def go():
        first, second = await asyncio.gather(orchestrator.refresh(), orchestrator.refresh())
        assert not orchestrator.in_progress
        third = await orchestrator.refresh()
        return first, second, third

    first, second, third = asyncio.run(go())
    assert first == second
    assert third["aws"].status == first["aws"].status
    assert aws.calls == 2


def test_identical_cycles_differ_only_in_timestamp() -> None:
    ticks = iter([T0, T1])
    registry = ProviderRegistry()
    registry.register(StubProvider("aws", "AWS"))
    cache = StatusCache(registry.keys)
    orchestrator = RefreshOrchestrator(registry, cache, clock=lambda: next(ticks))

    first = asyncio.run(orchestrator.refresh())["aws"]
    second = asyncio.run(orchestrator.refresh())["aws"]

    assert first.status == second.status
    assert (first.last_updated, second.last_updated) == (T0, T1)


class FlakyOrchestrator:
    def __init__(self) -> None:
        self.calls = 0

    async def refresh(self):
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("first tick fails")
        return {}


def test_scheduler_refreshes_immediately_and_survives_errors(caplog: pytest.LogCaptureFixture) -> None:
    orchestrator = FlakyOrchestrator()
    scheduler = Scheduler(orchestrator, interval_seconds=0)

    async def go() -> None:
        task = asyncio.create_task(scheduler.run())
        while orchestrator.calls < 3:
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(go())
    assert orchestrator.calls >= 3
    assert "Scheduled refresh failed" in caplog.text


def test_aclose_cancels_cycle_left_by_cancelled_scheduler() -> None:
    aws = StubProvider("aws", "AWS", delay=0.2)
    orchestrator, cache = build(aws)

    async def go() -> tuple[bool, bool]:
        task = asyncio.create_task(Scheduler(orchestrator, interval_seconds=300).run())
        await asyncio.sleep(0.01)
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
        orphaned = orchestrator.in_progress
        await orchestrator.aclose()
        return orphaned, orchestrator.in_progress

    orphaned, still_running = asyncio.run(go())
    assert orphaned
    assert not still_running
    assert aws.running == 0
    assert cache.get("aws") == CacheEntry()


def test_aclose_when_idle_is_a_no_op() -> None:
    orchestrator, cache = build(StubProvider("aws", "AWS"))

    asyncio.run(orchestrator.aclose())
    asyncio.run(orchestrator.refresh())
    asyncio.run(orchestrator.aclose())

    assert cache.get("aws").last_updated == T1
