from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from providers.base import StatusProvider


class ProviderRegistry:
    """Central registry of cloud provider adapters.

    Adding a new provider requires only instantiating it and calling
    ``register()`` -- the orchestrator, cache and API pick it up by key.
    """

    def __init__(self) -> None:
        self._providers: dict[str, StatusProvider] = {}

    def register(self, provider: StatusProvider) -> None:
        if provider.key in self._providers:
            raise ValueError(f"provider {provider.key!r} is already registered")
        self._providers[provider.key] = provider

    def get(self, key: str) -> StatusProvider:
        return self._providers[key]

    @property
    def keys(self) -> list[str]:
        return list(self._providers)

    @property
    def providers(self) -> list[StatusProvider]:
        return list(self._providers.values())
