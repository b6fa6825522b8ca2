# =============================================================================
# app/routers/businesses.py - Business Endpoints
# =============================================================================
# POST /api/businesses        create (rate limited: creation policy)
# GET  /api/businesses        paginated list, newest first
# GET  /api/businesses/{id}   single business
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.concurrency import run_in_threadpool

from app.dependencies import BusinessServiceDep
from app.exceptions import ValidationFailedError
from app.rate_limit import enforce_rate_limit
from core.models.business import Business, BusinessCreate
from core.models.pagination import Page
from core.validation import parse_page_request, validate

router = APIRouter()


@router.post(
    "",
    status_code=201,
    response_model=Business,
    dependencies=[Depends(enforce_rate_limit("create"))],
)
async def create_business(
    businesses: BusinessServiceDep,
    payload: Annotated[Any, Body()] = None,
):
    """
    Create a business.

    Body: {name, ownerName, ownerPhone, category, city}. All fields are
    required and non-empty; ownerPhone needs at least 10 characters.
    """
    result = validate(BusinessCreate, payload)
    if not result.ok:
        raise ValidationFailedError(result.errors)

    return await run_in_threadpool(businesses.create_business, result.value)


@router.get("", response_model=Page[Business])
async def list_businesses(
    request: Request,
    businesses: BusinessServiceDep,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Items per page")] = None,
):
    """List businesses, newest first."""
    settings = request.app.state.settings
    page_request = parse_page_request(
        page,
        limit,
        default_limit=settings.DEFAULT_PAGE_SIZE,
        max_limit=settings.MAX_PAGE_SIZE,
    )
    return await run_in_threadpool(businesses.list_businesses, page_request)


@router.get("/{business_id}", response_model=Business)
async def get_business(business_id: int, businesses: BusinessServiceDep):
    """Fetch one business by id."""
    return await run_in_threadpool(businesses.get_business, business_id)
