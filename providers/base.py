from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar

import feedparser
import httpx

from core.classifier import worst_status
from core.event_classifier import classify_event
from core.text import DEFAULT_DESCRIPTION_LIMIT, slugify, strip_markup
from models.catalog import CatalogEntry, ServiceCatalog
from models.event import NormalizedEvent
from models.status import NormalizedService, ProviderStatus, ServiceStatus

DEFAULT_EVENTS_LIMIT = 30
DEFAULT_REGION = "global"

T = TypeVar("T")

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchOutcome(Generic[T]):
    """Result of one upstream sub-fetch: the parsed records, or nothing
    plus the reason it failed. Sub-fetches return this instead of raising.
    """

    records: tuple[T, ...] = ()
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, error: str) -> FetchOutcome[T]:
        return cls(records=(), error=error)


def describe_error(exc: BaseException) -> str:
    """httpx timeouts often carry an empty message; keep the type visible."""
    detail = str(exc)
    return f"{type(exc).__name__}: {detail}" if detail else type(exc).__name__


class StatusProvider(ABC):
    """Abstract base for all cloud provider adapters.

    Each concrete provider fetches two independent upstream documents:
    a *signals* document (active events, incidents or a status page) and
    a news feed (RSS or Atom). Signals annotate the provider's service
    catalog; the feed becomes ``recent_events``.

    A shared ``httpx.AsyncClient`` is injected at construction time so
    that all providers reuse one connection pool.
    """

    # Feed entry fields tried in order for the event date.
    date_fields: tuple[str, ...] = ("published", "updated")

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        signals_url: str,
        signals_timeout: float,
        feed_url: str,
        feed_timeout: float,
        events_limit: int = DEFAULT_EVENTS_LIMIT,
        description_limit: int = DEFAULT_DESCRIPTION_LIMIT,
    ) -> None:
        self._client = client
        self._signals_url = signals_url
        self._signals_timeout = signals_timeout
        self._feed_url = feed_url
        self._feed_timeout = feed_timeout
        self._events_limit = events_limit
        self._description_limit = description_limit

    @property
    @abstractmethod
    def key(self) -> str:
        """Stable lowercase identifier used by the cache and the API (e.g. 'aws')."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable provider name (e.g. 'AWS')."""

    @property
    @abstractmethod
    def catalog(self) -> ServiceCatalog:
        """Curated services this provider reports on."""

    @abstractmethod
    def parse_signals(self, body: bytes) -> Sequence[Any]:
        """Decode the signals document into provider-native records.

        Raise ``ValueError`` when the payload is malformed.
        """

    @abstractmethod
    def annotate(self, entry: CatalogEntry, signals: Sequence[Any]) -> NormalizedService:
        """Build the normalized service for one catalog entry."""

    @abstractmethod
    def event_service(self, entry: Any, title: str) -> str:
        """Guess the affected service of a feed entry."""

    def count_active(self, signals: Sequence[Any]) -> int | None:
        """Number of active incidents, when the provider can tell."""
        return None

    # -- fetching ---------------------------------------------------------

    async def _download(self, url: str, timeout: float) -> bytes:
        resp = await self._client.get(url, timeout=timeout)
        resp.raise_for_status()
        return resp.content

    async def fetch_signals(self) -> FetchOutcome[Any]:
        try:
            body = await self._download(self._signals_url, self._signals_timeout)
            records = tuple(self.parse_signals(body))
        except (httpx.HTTPError, ValueError) as exc:
            log.warning("[%s] Signals fetch failed: %s", self.name, describe_error(exc))
            return FetchOutcome.failed(describe_error(exc))
        return FetchOutcome(records)

    async def fetch_feed(self) -> FetchOutcome[NormalizedEvent]:
        try:
            body = await self._download(self._feed_url, self._feed_timeout)
            events = self.parse_feed(body)
        except (httpx.HTTPError, ValueError) as exc:
            log.warning("[%s] Feed fetch failed: %s", self.name, describe_error(exc))
            return FetchOutcome.failed(describe_error(exc))
        return FetchOutcome(events)

    async def fetch_status(self) -> ProviderStatus:
        """Fetch both upstream documents concurrently and normalize them.

        Never raises for upstream trouble: a failed sub-fetch contributes
        no records, and an unexpected error while assembling falls back
        to the catalog with every service operational.
        """
        signals_result, feed_result = await asyncio.gather(
            self.fetch_signals(), self.fetch_feed(), return_exceptions=True
        )
        signals = self._settle(signals_result, "signals")
        feed = self._settle(feed_result, "feed")

        try:
            return self.build_status(signals.records, feed.records)
        except Exception:
            log.exception("[%s] Failed to assemble status, using catalog defaults", self.name)
            return self.fallback_status()

    def _settle(self, result: Any, label: str) -> FetchOutcome[Any]:
        if isinstance(result, FetchOutcome):
            return result
        if isinstance(result, Exception):
            log.error("[%s] %s sub-fetch crashed", self.name, label, exc_info=result)
            return FetchOutcome.failed(describe_error(result))
        raise result

    # -- normalizing ------------------------------------------------------

    def parse_feed(self, body: bytes) -> tuple[NormalizedEvent, ...]:
        feed = feedparser.parse(body)
        if feed.bozo and not feed.entries:
            raise ValueError(f"unparsable feed: {feed.get('bozo_exception')}")
        return tuple(self._to_event(entry) for entry in feed.entries[: self._events_limit])

    def _to_event(self, entry: Any) -> NormalizedEvent:
        title: str = (entry.get("title") or "").strip()
        text = strip_markup(_entry_body(entry), limit=None)
        return NormalizedEvent(
            title=title,
            description=text[: self._description_limit].rstrip(),
            date=next((entry[f] for f in self.date_fields if entry.get(f)), ""),
            guid=entry.get("id") or entry.get("link") or "",
            service=self.event_service(entry, title),
            type=classify_event(title, text),
            provider=self.name,
        )

    def service(
        self,
        entry: CatalogEntry,
        status: ServiceStatus = ServiceStatus.OPERATIONAL,
        status_raw: str | None = None,
        region: str = DEFAULT_REGION,
    ) -> NormalizedService:
        return NormalizedService(
            name=entry.name,
            slug=slugify(entry.name),
            region=region,
            status=status,
            status_raw=status_raw if status_raw is not None else status.value,
        )

    def build_status(
        self,
        signals: Sequence[Any],
        events: Sequence[NormalizedEvent],
    ) -> ProviderStatus:
        services = [self.annotate(entry, signals) for entry in self.catalog]
        return self._assemble(services, events, self.count_active(signals))

    def fallback_status(self) -> ProviderStatus:
        services = [self.service(entry) for entry in self.catalog]
        return self._assemble(services, (), None)

    def _assemble(
        self,
        services: list[NormalizedService],
        events: Sequence[NormalizedEvent],
        active_incidents: int | None,
    ) -> ProviderStatus:
        by_category: dict[str, list[NormalizedService]] = {
            category: [] for category in self.catalog.categories
        }
        for entry, svc in zip(self.catalog, services):
            by_category[entry.category].append(svc)

        return ProviderStatus(
            provider=self.name,
            overall_status=worst_status(svc.status for svc in services),
            categories=self.catalog.categories,
            services_by_category={k: tuple(v) for k, v in by_category.items()},
            services=tuple(services),
            recent_events=tuple(events),
            active_incidents=active_incidents,
        )


def _entry_body(entry: Any) -> str:
    """Atom entries carry ``content``; RSS items carry ``summary``."""
    content = entry.get("content") or []
    if content and content[0].get("value"):
        return content[0]["value"]
    return entry.get("summary") or ""
