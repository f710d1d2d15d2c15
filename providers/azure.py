from __future__ import annotations

from dataclasses import dataclass
from html.parser import HTMLParser
from typing import Any, Sequence

import httpx

from catalog.azure import AZURE_CATALOG
from core.classifier import azure_region_status, severity_rank
from core.text import fuzzy_match, title_prefix
from models.catalog import CatalogEntry, ServiceCatalog
from models.status import NormalizedService, ServiceStatus
from providers.base import StatusProvider

AZURE_STATUS_URL = "https://azure.status.microsoft/en-us/status"
AZURE_FEED_URL = "https://rssfeed.azure.status.microsoft/en-us/status/feed/"

_MAX_EVENT_CATEGORIES = 5


@dataclass
class RegionCounts:
    """Per-region status labels of one row in the Azure status table.

    "not available" and blank cells mean the service is not offered in
    that region, so they are left out of every count.
    """

    name: str
    good: int = 0
    warning: int = 0
    critical: int = 0

    def add(self, label: str) -> None:
        label = label.strip().lower()
        if label == "good":
            self.good += 1
        elif label == "warning":
            self.warning += 1
        elif label in ("critical", "error"):
            self.critical += 1

    @property
    def total(self) -> int:
        return self.good + self.warning + self.critical

    @property
    def status(self) -> ServiceStatus:
        return azure_region_status(self.critical, self.warning, self.total)

    @property
    def label(self) -> str:
        if self.critical:
            return "Critical"
        if self.warning:
            return "Warning"
        return "Good"


class _StatusTableParser(HTMLParser):
    """Collects service rows from every top-level ``<table>`` in the page.

    A row is a ``<tr>`` whose first cell is a ``<td>`` holding the service
    name; every ``data-label`` attribute in the remaining cells is one
    region.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tables: list[tuple[bool, list[RegionCounts]]] = []
        self._depth = 0
        self._rows: list[RegionCounts] | None = None
        self._row: RegionCounts | None = None
        self._cell = -1
        self._in_name = False
        self._name_buf: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        attributes = dict(attrs)
        if tag == "table":
            self._depth += 1
            if self._depth == 1:
                self._rows = []
                is_default = "default" in (attributes.get("class") or "")
                self.tables.append((is_default, self._rows))
            return
        if self._depth != 1:
            return

        if tag == "tr":
            self._end_row()
            self._cell = -1
        elif tag in ("td", "th"):
            self._end_name()
            self._cell += 1
            self._in_name = tag == "td" and self._cell == 0
            self._name_buf = []

        label = attributes.get("data-label")
        if label is not None and self._row is not None and self._cell > 0:
            self._row.add(label)

    def handle_endtag(self, tag: str) -> None:
        if tag == "table":
            if self._depth == 1:
                self._end_row()
                self._rows = None
            self._depth = max(self._depth - 1, 0)
        elif self._depth == 1:
            if tag == "td":
                self._end_name()
            elif tag == "tr":
                self._end_row()

    def handle_data(self, data: str) -> None:
        if self._in_name:
            self._name_buf.append(data)

    def _end_name(self) -> None:
        if not self._in_name:
            return
        self._in_name = False
        name = " ".join("".join(self._name_buf).split())
        if name:
            self._row = RegionCounts(name=name)

    def _end_row(self) -> None:
        self._end_name()
        if self._row is not None and self._rows is not None:
            self._rows.append(self._row)
        self._row = None


def parse_status_page(html: str) -> list[RegionCounts]:
    """Return the rows of the default status table.

    The page embeds several filtered views of the same data; only the
    table marked ``default`` (or, failing that, the first one) is read.
    """
    parser = _StatusTableParser()
    parser.feed(html)
    parser.close()
    if not parser.tables:
        raise ValueError("no status table found in page")

    rows = next((rows for is_default, rows in parser.tables if is_default), parser.tables[0][1])
    seen: set[str] = set()
    unique: list[RegionCounts] = []
    # The first row for a region name is kept; later duplicates are dropped.
    for row in rows:
        if row.name.lower() not in seen:
            seen.add(row.name.lower())
            unique.append(row)
    return unique


class AzureProvider(StatusProvider):
    """Provider adapter for the Azure status page.

    Azure has no machine-readable status API, so per-region health is
    scraped from the status page HTML; recent events come from RSS.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        status_url: str = AZURE_STATUS_URL,
        status_timeout: float = 20.0,
        feed_url: str = AZURE_FEED_URL,
        feed_timeout: float = 10.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            client,
            signals_url=status_url,
            signals_timeout=status_timeout,
            feed_url=feed_url,
            feed_timeout=feed_timeout,
            **kwargs,
        )

    @property
    def key(self) -> str:
        return "azure"

    @property
    def name(self) -> str:
        return "Azure"

    @property
    def catalog(self) -> ServiceCatalog:
        return AZURE_CATALOG

    def parse_signals(self, body: bytes) -> list[RegionCounts]:
        return parse_status_page(body.decode("utf-8", errors="replace"))

    def annotate(self, entry: CatalogEntry, signals: Sequence[RegionCounts]) -> NormalizedService:
        # An exact row wins; otherwise "App Service" would also pick up
        # the "App Service (Linux)" row.
        wanted = entry.name.lower()
        candidates = [row for row in signals if row.name.lower() == wanted]
        if not candidates:
            candidates = [row for row in signals if fuzzy_match(entry.name, row.name)]
        if not candidates:
            return self.service(entry, status_raw="Good")

        worst = max(candidates, key=lambda row: (severity_rank(row.status), row.critical, row.warning))
        return self.service(entry, status=worst.status, status_raw=worst.label)

    def count_active(self, signals: Sequence[RegionCounts]) -> int:
        return sum(1 for row in signals if row.status is not ServiceStatus.OPERATIONAL)

    def event_service(self, entry: Any, title: str) -> str:
        terms = [tag.get("term") for tag in entry.get("tags") or [] if tag.get("term")]
        if terms:
            return ", ".join(terms[:_MAX_EVENT_CATEGORIES])
        return title_prefix(title)
