from models.catalog import CatalogEntry, ServiceCatalog
from models.event import EventType, NormalizedEvent
from models.status import CacheEntry, NormalizedService, ProviderStatus, ServiceStatus

__all__ = [
    "CacheEntry",
    "CatalogEntry",
    "EventType",
    "NormalizedEvent",
    "NormalizedService",
    "ProviderStatus",
    "ServiceCatalog",
    "ServiceStatus",
]
