# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the OvaSight API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   ovasight-api                      # console script, binds HOST:PORT
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, settings as default_settings
from app.exceptions import (
    OvaSightException,
    http_exception_handler,
    ovasight_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.middleware import BodySizeLimitMiddleware, request_logging_middleware
from app.rate_limit import SlidingWindowRateLimiter, default_policies, enforce_rate_limit
from app.routers import businesses, health, reports
from lib.supabase_client import SupabaseClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: log the effective configuration
    - Shutdown: drop the shared Supabase client
    """
    app_settings: Settings = app.state.settings
    logger.info(f"Starting OvaSight API in {app_settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {app_settings.cors_origins_list}")
    logger.info(f"Health check: http://localhost:{app_settings.PORT}/health")

    yield

    logger.info("Shutting down OvaSight API")
    SupabaseClient.reset()


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Each app owns its settings and its rate limiter (`app.state`), so two
    apps in one process never share counters.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="OvaSight API",
        description="""
## Business Performance Reporting API

Administrators register businesses; owners submit daily reports with sales,
expenses, customer counts, notes and photo/video evidence.

### Quick Start

```bash
# 1. Register a business
curl -X POST http://localhost:4000/api/businesses \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Joe Deli", "ownerName": "Joe Smith", "ownerPhone": "5551234567", "category": "Restaurant", "city": "Boston"}'

# 2. Submit a report
curl -X POST http://localhost:4000/api/reports \\
  -F sales=250.50 -F expenses=80.25 -F customerCount=34 -F businessId=1 \\
  -F "image=@storefront.jpg;type=image/jpeg"

# 3. List reports
curl "http://localhost:4000/api/reports/business/1?page=1&limit=10"
```
""",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Businesses", "description": "Register and list businesses"},
            {"name": "Reports", "description": "Submit and list daily reports"},
            {"name": "Health", "description": "API health check"},
        ],
    )

    app.state.settings = app_settings
    app.state.rate_limiter = SlidingWindowRateLimiter(
        default_policies(app_settings),
        enabled=app_settings.RATE_LIMIT_ENABLED,
    )

    # =========================================================================
    # Middleware
    # =========================================================================

    app.middleware("http")(request_logging_middleware)

    app.add_middleware(
        BodySizeLimitMiddleware,
        max_body_bytes=app_settings.MAX_BODY_SIZE_BYTES,
        max_multipart_bytes=app_settings.max_multipart_body_bytes,
    )

    # CORS middleware - allows cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list if app_settings.is_production else ["*"],
        allow_credentials=app_settings.is_production,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(OvaSightException, ovasight_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    api_limit = [Depends(enforce_rate_limit("api"))]

    app.include_router(
        health.router,
        tags=["Health"]
    )

    app.include_router(
        businesses.router,
        prefix="/api/businesses",
        tags=["Businesses"],
        dependencies=api_limit,
    )

    app.include_router(
        reports.router,
        prefix="/api/reports",
        tags=["Reports"],
        dependencies=api_limit,
    )

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint - confirms the API is up."""
        return {
            "message": "OvaSight API is running",
            "docs": "/docs",
            "health": "/health",
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.is_development and default_settings.DEBUG,
    )
