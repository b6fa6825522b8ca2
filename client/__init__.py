# =============================================================================
# client/ - Python Client Data Layer
# =============================================================================
# - api.py: httpx client for the REST endpoints
# - cache.py: infinite-page query cache with snapshots
# - mutations.py: optimistic create with wholesale rollback
# =============================================================================

from client.api import ApiError, MediaFile, MediaTooLargeError, OvaSightClient, ReportSubmission
from client.cache import BUSINESSES_KEY, CacheSnapshot, InfinitePages, QueryCache, reports_key
from client.mutations import MutationPlan, OptimisticCreator

__all__ = [
    "ApiError",
    "BUSINESSES_KEY",
    "CacheSnapshot",
    "InfinitePages",
    "MediaFile",
    "MediaTooLargeError",
    "MutationPlan",
    "OptimisticCreator",
    "OvaSightClient",
    "QueryCache",
    "ReportSubmission",
    "reports_key",
]
