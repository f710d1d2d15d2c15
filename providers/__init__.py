from __future__ import annotations

from typing import Any

import httpx

from core.config import Settings
from core.registry import ProviderRegistry
from providers.aws import AWSProvider
from providers.azure import AzureProvider
from providers.base import FetchOutcome, StatusProvider
from providers.gcp import GCPProvider

__all__ = [
    "AWSProvider",
    "AzureProvider",
    "FetchOutcome",
    "GCPProvider",
    "StatusProvider",
    "build_registry",
    "make_http_client",
]


def make_http_client(settings: Settings, **kwargs: Any) -> httpx.AsyncClient:
    """Shared client for every provider; per-request timeouts are set by the adapters."""
    return httpx.AsyncClient(
        headers={"User-Agent": settings.USER_AGENT},
        follow_redirects=True,
        **kwargs,
    )


def build_registry(client: httpx.AsyncClient, settings: Settings) -> ProviderRegistry:
    """Register the AWS, Azure and GCP adapters configured from *settings*."""
    limits = {
        "events_limit": settings.RECENT_EVENTS_LIMIT,
        "description_limit": settings.DESCRIPTION_MAX_LENGTH,
    }
    registry = ProviderRegistry()
    registry.register(AWSProvider(
        client,
        events_url=settings.AWS_EVENTS_URL,
        events_timeout=settings.AWS_EVENTS_TIMEOUT,
        feed_url=settings.AWS_FEED_URL,
        feed_timeout=settings.AWS_FEED_TIMEOUT,
        **limits,
    ))
    registry.register(AzureProvider(
        client,
        status_url=settings.AZURE_STATUS_URL,
        status_timeout=settings.AZURE_STATUS_TIMEOUT,
        feed_url=settings.AZURE_FEED_URL,
        feed_timeout=settings.AZURE_FEED_TIMEOUT,
        **limits,
    ))
    registry.register(GCPProvider(
        client,
        incidents_url=settings.GCP_INCIDENTS_URL,
        incidents_timeout=settings.GCP_INCIDENTS_TIMEOUT,
        feed_url=settings.GCP_FEED_URL,
        feed_timeout=settings.GCP_FEED_TIMEOUT,
        **limits,
    ))
    return registry
