"""GCP adapter: active-incident filtering, product severity, Atom feed."""

import json

from catalog.gcp import GCP_CATALOG
from models.event import EventType
from models.status import ServiceStatus
from providers.gcp import GCP_FEED_URL, GCP_INCIDENTS_URL, GCPProvider, affected_products, incident_severity
from tests.helpers import fetch_status, fixture_bytes, recording, service_by_name, timeout

INCIDENTS = fixture_bytes("gcp_incidents.json")
FEED = fixture_bytes("gcp_feed.atom")


def routes(incidents: object = INCIDENTS, feed: object = FEED) -> dict:
    return {GCP_INCIDENTS_URL: incidents, GCP_FEED_URL: feed}


def test_incident_severity_sources() -> None:
    assert incident_severity({"status_impact": "SERVICE_OUTAGE", "severity": "low"}) == "SERVICE_OUTAGE"
    assert incident_severity({"severity": "SERVICE_DISRUPTION"}) == "SERVICE_DISRUPTION"
    assert incident_severity({"most_recent_update": {"severity": "AVAILABLE"}}) == "AVAILABLE"
    assert incident_severity({}) is None


def test_affected_products_keep_worst_severity() -> None:
    incidents = [
        {"severity": "SERVICE_DISRUPTION", "affected_products": [{"title": "Cloud SQL"}]},
        {"severity": "SERVICE_OUTAGE", "affected_products": ["Cloud SQL", {"id": "no-title"}]},
    ]
    assert affected_products(incidents) == {"Cloud SQL": ServiceStatus.DISRUPTION}


def test_only_active_incidents_count() -> None:
    status = fetch_status(GCPProvider, routes())

    assert service_by_name(status, "Compute Engine").status is ServiceStatus.OPERATIONAL
    assert status.active_incidents == 4


def test_services_take_worst_matching_incident() -> None:
    status = fetch_status(GCPProvider, routes())

    assert service_by_name(status, "Cloud Storage").status is ServiceStatus.DISRUPTION
    assert service_by_name(status, "Cloud Storage for Firebase").status is ServiceStatus.DISRUPTION
    assert service_by_name(status, "BigQuery").status is ServiceStatus.DEGRADED
    assert service_by_name(status, "Cloud Run").status is ServiceStatus.DEGRADED
    assert service_by_name(status, "Looker").status is ServiceStatus.INFORMATIONAL
    assert service_by_name(status, "Cloud Run").status_raw == "degraded"
    assert status.overall_status is ServiceStatus.DISRUPTION


def test_slug_collapses_slashes() -> None:
    status = fetch_status(GCPProvider, routes())
    assert service_by_name(status, "Pub/Sub").slug == "pub-sub"


def test_catalog_is_complete() -> None:
    status = fetch_status(GCPProvider, routes())

    assert status.provider == "GCP"
    assert status.total_services == len(GCP_CATALOG) == len(status.services)
    assert list(status.services_by_category) == list(GCP_CATALOG.categories)


def test_atom_entries_become_events() -> None:
    first, second = fetch_status(GCPProvider, routes()).recent_events

    assert first.title == "RESOLVED: Cloud Storage elevated error rates in us-central1"
    assert first.description == "The issue with Cloud Storage has been resolved for all affected users."
    assert first.date == "2025-10-10T12:00:00+00:00"
    assert first.guid == "tag:status.cloud.google.com,2025:feed:inc-storage-old"
    assert first.type is EventType.RESOLVED

    assert second.service == "BigQuery"
    assert second.type is EventType.DEGRADED
    assert second.provider == "GCP"


def test_incidents_timeout_keeps_feed() -> None:
    status = fetch_status(GCPProvider, routes(incidents=timeout))

    assert all(svc.status is ServiceStatus.OPERATIONAL for svc in status.services)
    assert len(status.recent_events) == 2


def test_all_incidents_resolved_is_operational() -> None:
    incidents = json.dumps([
        {"end": "2025-10-01T00:00:00Z", "status_impact": "SERVICE_OUTAGE",
         "affected_products": [{"title": "Cloud SQL"}]},
    ]).encode()
    status = fetch_status(GCPProvider, routes(incidents=incidents))

    assert status.overall_status is ServiceStatus.OPERATIONAL
    assert status.active_incidents == 0


def test_unparsable_feed_gives_no_events() -> None:
    status = fetch_status(GCPProvider, routes(feed=b"Service Unavailable"))

    assert status.recent_events == ()
    assert status.overall_status is ServiceStatus.DISRUPTION


def test_event_date_prefers_latest_revision() -> None:
    feed = (
        '<?xml version="1.0" encoding="UTF-8"?><feed xmlns="http://www.w3.org/2005/Atom">'
        "<title>t</title><id>f</id><updated>2025-10-14T13:00:00+00:00</updated>"
        "<entry><title>Cloud SQL - Connection failures</title><id>e1</id>"
        "<published>2025-10-14T09:00:00+00:00</published>"
        "<updated>2025-10-14T12:30:00+00:00</updated></entry></feed>"
    )
    (event,) = fetch_status(GCPProvider, routes(feed=feed.encode())).recent_events

    assert event.date == "2025-10-14T12:30:00+00:00"


def test_each_sub_fetch_sends_its_timeout() -> None:
    seen: dict = {}
    fetch_status(GCPProvider, routes(incidents=recording(seen, INCIDENTS), feed=recording(seen, FEED)))

    assert seen == {GCP_INCIDENTS_URL: 15.0, GCP_FEED_URL: 10.0}
