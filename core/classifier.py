"""Provider-specific mappings from upstream signals to ``ServiceStatus``.

Each provider reports severity differently, so there is one strategy per
provider; they share only the output vocabulary and the severity order.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from models.status import ServiceStatus

SEVERITY_RANK: dict[ServiceStatus, int] = {
    ServiceStatus.OPERATIONAL: 0,
    ServiceStatus.INFORMATIONAL: 1,
    ServiceStatus.DEGRADED: 2,
    ServiceStatus.DISRUPTION: 3,
}

AWS_DISRUPTION_TERMS = ("disruption", "outage")
AWS_DEGRADED_TERMS = ("degraded", "increased error", "elevated error")

AZURE_CRITICAL_DISRUPTION_RATIO = 0.5
AZURE_CRITICAL_DEGRADED_RATIO = 0.2
AZURE_WARNING_DEGRADED_RATIO = 0.5
AZURE_WARNING_INFORMATIONAL_RATIO = 0.15

GCP_SEVERITY_MAP: dict[str, ServiceStatus] = {
    "SERVICE_OUTAGE": ServiceStatus.DISRUPTION,
    "SERVICE_DISRUPTION": ServiceStatus.DEGRADED,
    "AVAILABLE": ServiceStatus.OPERATIONAL,
}


def severity_rank(status: ServiceStatus) -> int:
    return SEVERITY_RANK.get(status, 0)


def worst_status(statuses: Iterable[ServiceStatus]) -> ServiceStatus:
    """Return the most severe status, or operational when there is none."""
    worst = ServiceStatus.OPERATIONAL
    for status in statuses:
        if severity_rank(status) > severity_rank(worst):
            worst = status
    return worst


def aws_record_status(record: Mapping[str, Any]) -> ServiceStatus:
    """Classify one active AWS event from its free-text fields."""
    text = " ".join(
        str(record.get(field) or "") for field in ("description", "status")
    ).lower()
    if any(term in text for term in AWS_DISRUPTION_TERMS):
        return ServiceStatus.DISRUPTION
    if any(term in text for term in AWS_DEGRADED_TERMS):
        return ServiceStatus.DEGRADED
    return ServiceStatus.INFORMATIONAL


def aws_status(records: Iterable[Mapping[str, Any]]) -> ServiceStatus:
    """Worst status over the active events matching one service."""
    return worst_status(aws_record_status(record) for record in records)


def azure_region_status(critical: int, warning: int, total: int) -> ServiceStatus:
    """Map per-region label counts to a status.

    Ratios rather than raw counts are used so that one affected region
    out of many does not read as a global disruption.
    """
    denominator = max(total, 1)
    if critical > 0:
        ratio = critical / denominator
        if ratio >= AZURE_CRITICAL_DISRUPTION_RATIO:
            return ServiceStatus.DISRUPTION
        if ratio >= AZURE_CRITICAL_DEGRADED_RATIO:
            return ServiceStatus.DEGRADED
        return ServiceStatus.INFORMATIONAL
    if warning > 0:
        ratio = warning / denominator
        if ratio >= AZURE_WARNING_DEGRADED_RATIO:
            return ServiceStatus.DEGRADED
        if ratio >= AZURE_WARNING_INFORMATIONAL_RATIO:
            return ServiceStatus.INFORMATIONAL
    return ServiceStatus.OPERATIONAL


def gcp_severity_status(severity: str | None) -> ServiceStatus:
    return GCP_SEVERITY_MAP.get((severity or "").upper(), ServiceStatus.INFORMATIONAL)
