# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .business_service import BusinessService
from .report_service import ReportService
from .storage_service import StorageService, StoredMedia

__all__ = [
    "BusinessService",
    "ReportService",
    "StorageService",
    "StoredMedia",
]
