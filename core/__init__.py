from core.cache import StatusCache
from core.orchestrator import RefreshOrchestrator
from core.registry import ProviderRegistry
from core.scheduler import Scheduler

__all__ = ["ProviderRegistry", "RefreshOrchestrator", "Scheduler", "StatusCache"]
