# =============================================================================
# app/routers/reports.py - Report Endpoints
# =============================================================================
# POST /api/reports                        multipart submission (rate limited)
# GET  /api/reports                        all reports, newest first
# GET  /api/reports/business/{businessId}  one business's reports
#
# Submission flow: receive_report_upload (app/uploads.py) validates and
# stores the media first; this controller then checks the image is present,
# validates the text fields and inserts the row. Media whose report is never
# persisted is removed from storage again.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.concurrency import run_in_threadpool

from app.dependencies import ReportServiceDep, StorageServiceDep
from app.exceptions import ImageRequiredError, ValidationFailedError
from app.rate_limit import enforce_rate_limit
from app.uploads import ReportUpload, receive_report_upload
from core.models.pagination import Page, PageRequest
from core.models.report import Report, ReportCreate
from core.validation import FieldIssue, parse_page_request, validate

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Helper Functions
# =============================================================================

def _page_request(request: Request, page: str | None, limit: str | None) -> PageRequest:
    settings = request.app.state.settings
    return parse_page_request(
        page,
        limit,
        default_limit=settings.DEFAULT_PAGE_SIZE,
        max_limit=settings.MAX_PAGE_SIZE,
    )


def _parse_business_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        issue = FieldIssue(field="businessId", message="Input should be a valid integer", code="int_parsing")
        raise ValidationFailedError([issue.to_dict()])


# =============================================================================
# Endpoints
# =============================================================================

@router.post(
    "",
    status_code=201,
    response_model=Report,
    dependencies=[Depends(enforce_rate_limit("upload"))],
)
async def create_report(
    reports: ReportServiceDep,
    storage: StorageServiceDep,
    upload: Annotated[ReportUpload, Depends(receive_report_upload)],
):
    """
    Submit a daily report.

    Multipart form: sales, expenses, customerCount, businessId, notes
    (optional), image (file, required), video (file, optional).
    """
    try:
        if upload.image is None:
            raise ImageRequiredError()

        result = validate(ReportCreate, upload.fields)
        if not result.ok:
            raise ValidationFailedError(result.errors)

        return await run_in_threadpool(
            reports.create_report,
            result.value,
            upload.image.location,
            upload.video.location if upload.video else None,
        )

    except Exception:
        if upload.stored_keys:
            logger.info(f"Removing media for rejected report: {upload.stored_keys}")
            await run_in_threadpool(storage.delete_files, upload.stored_keys)
        raise


@router.get("", response_model=Page[Report])
async def list_reports(
    request: Request,
    reports: ReportServiceDep,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Items per page")] = None,
):
    """List reports across all businesses, newest first."""
    page_request = _page_request(request, page, limit)
    return await run_in_threadpool(reports.list_reports, page_request)


@router.get("/business/{business_id}", response_model=Page[Report])
async def list_reports_by_business(
    request: Request,
    reports: ReportServiceDep,
    business_id: Annotated[str, Path(description="Business id")],
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
    limit: Annotated[str | None, Query(description="Items per page")] = None,
):
    """List one business's reports, newest first."""
    business_id_int = _parse_business_id(business_id)
    page_request = _page_request(request, page, limit)
    return await run_in_threadpool(
        reports.list_reports_by_business,
        business_id_int,
        page_request,
    )
