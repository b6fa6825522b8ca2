# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - uploads.py: Multipart media validation and storage
# - rate_limit.py: Per-client sliding-window rate limiting
# - routers/: API endpoint definitions organized by resource
#
# The app layer is thin - it handles HTTP concerns and delegates
# persistence to the core/ package.
# =============================================================================
