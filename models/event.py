from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class EventType(str, Enum):
    RESOLVED = "resolved"
    DISRUPTION = "disruption"
    DEGRADED = "degraded"
    MAINTENANCE = "maintenance"
    CHANGE = "change"
    INFORMATIONAL = "informational"


@dataclass(frozen=True)
class NormalizedEvent:
    """Canonical feed entry emitted by every provider adapter.

    Fields:
        title:       Entry title as published upstream.
        description: Markup-free, length-capped entry body.
        date:        Upstream date string, passed through unparsed.
        guid:        Upstream entry identifier.
        service:     Affected product, guessed from title or categories.
        type:        Keyword classification of title + description.
        provider:    Human-readable provider name ("AWS", "Azure", "GCP").
    """

    title: str
    description: str
    date: str
    guid: str
    service: str
    type: EventType
    provider: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "guid": self.guid,
            "service": self.service,
            "type": self.type.value,
            "provider": self.provider,
        }
