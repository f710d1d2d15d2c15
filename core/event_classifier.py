from __future__ import annotations

from models.event import EventType

# Evaluated top to bottom; the first rule with a matching phrase wins.
EVENT_RULES: tuple[tuple[EventType, tuple[str, ...]], ...] = (
    (EventType.RESOLVED, (
        "resolved", "mitigated", "recovery complete",
        "operating normally", "service has been restored",
    )),
    (EventType.DISRUPTION, ("outage", "disruption", "unavailable")),
    (EventType.DEGRADED, (
        "degraded", "degradation", "intermittent",
        "increased error", "elevated error",
    )),
    (EventType.MAINTENANCE, ("maintenance", "planned")),
    (EventType.CHANGE, ("policy", "change", "update", "retirement", "deprecation")),
)


def classify_event(title: str, description: str = "") -> EventType:
    """Classify a feed entry by keyword, falling back to informational."""
    text = f"{title} {description}".lower()
    for event_type, phrases in EVENT_RULES:
        if any(phrase in text for phrase in phrases):
            return event_type
    return EventType.INFORMATIONAL
