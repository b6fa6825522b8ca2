# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by resource:
# - health.py: Health check endpoint
# - businesses.py: Business creation and listing
# - reports.py: Report submission (multipart) and listing
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import businesses
from . import health
from . import reports

__all__ = [
    "businesses",
    "health",
    "reports",
]
