"""Core sync functionality."""

from .auth import GleanAuth
from .client import GleanAPIError, GleanClient
from .filters import parse_filters
from .locator import CollectionLocator
from .orchestrator import SyncOrchestrator
from .reconciler import CollectionReconciler, SyncPlan, plan_sync
from .search import QueryExecutor, build_search_payload

__all__ = [
    "CollectionLocator",
    "CollectionReconciler",
    "GleanAPIError",
    "GleanAuth",
    "GleanClient",
    "QueryExecutor",
    "SyncOrchestrator",
    "SyncPlan",
    "build_search_payload",
    "parse_filters",
    "plan_sync",
]
