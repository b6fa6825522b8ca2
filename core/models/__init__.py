# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - business.py: Business input/output schemas
# - report.py: Report input/output schemas and money coercion
# - pagination.py: Page request and the paginated response envelope
#
# These models define the "contract" between API and clients.
# =============================================================================

from .business import Business, BusinessCreate
from .pagination import Page, PageMeta, PageRequest, total_pages
from .report import Report, ReportCreate, to_money

__all__ = [
    "Business",
    "BusinessCreate",
    "Page",
    "PageMeta",
    "PageRequest",
    "Report",
    "ReportCreate",
    "to_money",
    "total_pages",
]
