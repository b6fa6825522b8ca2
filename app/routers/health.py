# =============================================================================
# app/routers/health.py - Health Check Endpoint
# =============================================================================
# Reports process and database health for monitoring and load balancers.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app.dependencies import BusinessServiceDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check(request: Request, businesses: BusinessServiceDep):
    """
    Health check endpoint.

    Runs a trivial query against the store. Returns 200 when it answers and
    503 when it does not.
    """
    timestamp = datetime.now(timezone.utc).isoformat()

    try:
        await run_in_threadpool(businesses.ping)
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "error",
                "timestamp": timestamp,
                "database": "disconnected",
            },
        )

    return {
        "status": "ok",
        "timestamp": timestamp,
        "database": "connected",
        "environment": request.app.state.settings.ENVIRONMENT,
    }
