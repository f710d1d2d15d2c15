from __future__ import annotations

from datetime import datetime
from typing import Iterable

from models.status import CacheEntry, ProviderStatus


class StatusCache:
    """Latest ``ProviderStatus`` per provider, shared by the orchestrator
    (the only writer) and the API (readers).

    Each publish replaces the provider's frozen ``CacheEntry`` in a single
    dict assignment, so readers see either the previous entry or the new
    one and never a half-built status. No lock is needed on one event loop.
    """

    def __init__(self, keys: Iterable[str]) -> None:
        self._entries: dict[str, CacheEntry] = {key: CacheEntry() for key in keys}

    def get(self, key: str) -> CacheEntry:
        """Return the entry for *key*; unknown keys raise ``KeyError``."""
        return self._entries[key]

    def snapshot(self) -> dict[str, CacheEntry]:
        return dict(self._entries)

    def publish(self, key: str, status: ProviderStatus, updated_at: datetime) -> CacheEntry:
        if key not in self._entries:
            raise KeyError(key)
        entry = CacheEntry(status=status, last_updated=updated_at)
        self._entries[key] = entry
        return entry

    @property
    def keys(self) -> list[str]:
        return list(self._entries)
