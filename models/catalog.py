from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Mapping, Sequence


@dataclass(frozen=True)
class CatalogEntry:
    category: str
    name: str


class ServiceCatalog:
    """Curated, read-only list of known services for one provider.

    Upstream status sources do not expose a complete service inventory,
    so every provider annotates this list instead of building its own.
    """

    def __init__(self, entries: Sequence[CatalogEntry]) -> None:
        self._entries = tuple(entries)
        categories: list[str] = []
        for entry in self._entries:
            if entry.category not in categories:
                categories.append(entry.category)
        self._categories = tuple(categories)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> ServiceCatalog:
        return cls([
            CatalogEntry(category=category, name=name)
            for category, names in mapping.items()
            for name in names
        ])

    @property
    def categories(self) -> tuple[str, ...]:
        return self._categories

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
