from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from models.event import NormalizedEvent


class ServiceStatus(str, Enum):
    OPERATIONAL = "operational"
    INFORMATIONAL = "informational"
    DEGRADED = "degraded"
    DISRUPTION = "disruption"
    MAINTENANCE = "maintenance"


@dataclass(frozen=True)
class NormalizedService:
    """One catalog entry annotated with its live status."""

    name: str
    slug: str
    region: str
    status: ServiceStatus
    status_raw: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "slug": self.slug,
            "region": self.region,
            "status": self.status.value,
            "statusRaw": self.status_raw,
        }


@dataclass(frozen=True)
class ProviderStatus:
    """Complete normalized snapshot of one provider.

    ``services`` and ``services_by_category`` hold the same service
    objects; the flat tuple follows catalog order.
    """

    provider: str
    overall_status: ServiceStatus
    categories: tuple[str, ...]
    services_by_category: Mapping[str, tuple[NormalizedService, ...]]
    services: tuple[NormalizedService, ...]
    recent_events: tuple[NormalizedEvent, ...]
    active_incidents: int | None = None

    @property
    def total_services(self) -> int:
        return len(self.services)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "provider": self.provider,
            "overallStatus": self.overall_status.value,
            "totalServices": self.total_services,
            "categories": list(self.categories),
            "servicesByCategory": {
                category: [svc.to_dict() for svc in services]
                for category, services in self.services_by_category.items()
            },
            "services": [svc.to_dict() for svc in self.services],
            "recentEvents": [event.to_dict() for event in self.recent_events],
        }
        if self.active_incidents is not None:
            payload["activeIncidents"] = self.active_incidents
        return payload


@dataclass(frozen=True)
class CacheEntry:
    """Latest known state of one provider.

    ``last_updated`` is None until the first successful fetch, which lets
    readers tell "never fetched" apart from "stale".
    """

    status: ProviderStatus | None = None
    last_updated: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.to_dict() if self.status else None,
            "lastUpdated": self.last_updated.isoformat() if self.last_updated else None,
        }
