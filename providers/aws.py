from __future__ import annotations

import json
from typing import Any, Mapping, Sequence

import httpx

from catalog.aws import AWS_CATALOG
from core.classifier import aws_record_status, aws_status, severity_rank
from core.text import fuzzy_match, title_after_colon
from models.catalog import CatalogEntry, ServiceCatalog
from models.status import NormalizedService
from providers.base import DEFAULT_REGION, StatusProvider

AWS_EVENTS_URL = "https://health.aws.amazon.com/public/currentevents"
AWS_FEED_URL = "https://status.aws.amazon.com/rss/all.rss"

_BOM_UTF16_BE = b"\xfe\xff"
_BOM_UTF16_LE = b"\xff\xfe"


def decode_events_payload(body: bytes) -> str:
    """Decode the current-events document.

    AWS serves it as UTF-16 with a byte-order mark; without one the body
    is plain UTF-8.
    """
    if body.startswith(_BOM_UTF16_BE):
        return body[2:].decode("utf-16-be")
    if body.startswith(_BOM_UTF16_LE):
        return body[2:].decode("utf-16-le")
    return body.decode("utf-8-sig")


def _record_names(record: Mapping[str, Any]) -> list[str]:
    return [
        str(record[field])
        for field in ("service_name", "service")
        if record.get(field)
    ]


class AWSProvider(StatusProvider):
    """Provider adapter for the AWS Health Dashboard.

    Active events come from the public current-events JSON document;
    recent history comes from the all-services RSS feed.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        events_url: str = AWS_EVENTS_URL,
        events_timeout: float = 15.0,
        feed_url: str = AWS_FEED_URL,
        feed_timeout: float = 10.0,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            client,
            signals_url=events_url,
            signals_timeout=events_timeout,
            feed_url=feed_url,
            feed_timeout=feed_timeout,
            **kwargs,
        )

    @property
    def key(self) -> str:
        return "aws"

    @property
    def name(self) -> str:
        return "AWS"

    @property
    def catalog(self) -> ServiceCatalog:
        return AWS_CATALOG

    def parse_signals(self, body: bytes) -> list[dict[str, Any]]:
        payload = json.loads(decode_events_payload(body))
        if not isinstance(payload, list):
            raise ValueError(f"expected a JSON array of events, got {type(payload).__name__}")
        return [record for record in payload if isinstance(record, dict)]

    def annotate(self, entry: CatalogEntry, signals: Sequence[Mapping[str, Any]]) -> NormalizedService:
        matches = [
            record for record in signals
            if any(fuzzy_match(entry.name, name) for name in _record_names(record))
        ]
        if not matches:
            return self.service(entry)

        worst = max(matches, key=lambda record: severity_rank(aws_record_status(record)))
        region = worst.get("region") or worst.get("region_name") or DEFAULT_REGION
        return self.service(entry, status=aws_status(matches), region=str(region))

    def count_active(self, signals: Sequence[Any]) -> int:
        return len(signals)

    def event_service(self, entry: Any, title: str) -> str:
        return title_after_colon(title)
