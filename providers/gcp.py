from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, Sequence

import httpx

from catalog.gcp import GCP_CATALOG
from core.classifier import gcp_severity_status, severity_rank, worst_status
from core.text import fuzzy_match, title_prefix
from models.catalog import CatalogEntry, ServiceCatalog
from models.status import NormalizedService, ServiceStatus
from providers.base import StatusProvider

GCP_INCIDENTS_URL = "https://status.cloud.google.com/incidents.json"
GCP_FEED_URL = "https://status.cloud.google.com/en/feed.atom"


def incident_severity(incident: Mapping[str, Any]) -> str | None:
    """The incident's impact enum (e.g. ``SERVICE_OUTAGE``), if it has one."""
    for value in (incident.get("status_impact"), incident.get("severity")):
        if value:
            return str(value)
    latest = incident.get("most_recent_update")
    if isinstance(latest, Mapping) and latest.get("severity"):
        return str(latest["severity"])
    return None


def affected_products(incidents: Iterable[Mapping[str, Any]]) -> dict[str, ServiceStatus]:
    """Map each affected product name to the worst status of its incidents."""
    products: dict[str, ServiceStatus] = {}
    for incident in incidents:
        status = gcp_severity_status(incident_severity(incident))
        for product in incident.get("affected_products") or []:
            name = product.get("title") if isinstance(product, Mapping) else product
            if not name:
                continue
            name = str(name)
            existing = products.get(name)
            if existing is None or severity_rank(status) > severity_rank(existing):
                products[name] = status
    return products


class GCPProvider(StatusProvider):
    """Provider adapter for the Google Cloud status dashboard.

    Incidents without an ``end`` timestamp are active; their affected
    products are matched against the catalog. Recent events come from
    the Atom feed.
    """

    # Atom entries are revised in place; the latest revision time wins.
    date_fields = ("updated", "published")

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        incidents_url: str = GCP_INCIDENTS_URL,
        incidents_timeout: float = 15.0,
        feed_url: str = GCP_FEED_URL,
        feed_timeout: float = 10.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            client,
            signals_url=incidents_url,
            signals_timeout=incidents_timeout,
            feed_url=feed_url,
            feed_timeout=feed_timeout,
            **kwargs,
        )

    @property
    def key(self) -> str:
        return "gcp"

    @property
    def name(self) -> str:
        return "GCP"

    @property
    def catalog(self) -> ServiceCatalog:
        return GCP_CATALOG

    def parse_signals(self, body: bytes) -> list[dict[str, Any]]:
        """Return only the active incidents."""
        payload = json.loads(body)
        if not isinstance(payload, list):
            raise ValueError(f"expected a JSON array of incidents, got {type(payload).__name__}")
        return [
            incident for incident in payload
            if isinstance(incident, dict) and not incident.get("end")
        ]

    def annotate(self, entry: CatalogEntry, signals: Sequence[Mapping[str, Any]]) -> NormalizedService:
        status = worst_status(
            product_status
            for product, product_status in affected_products(signals).items()
            if fuzzy_match(entry.name, product)
        )
        return self.service(entry, status=status)

    def count_active(self, signals: Sequence[Any]) -> int:
        return len(signals)

    def event_service(self, entry: Any, title: str) -> str:
        return title_prefix(title)
