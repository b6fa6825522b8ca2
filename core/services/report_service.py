# =============================================================================
# core/services/report_service.py - Report Business Logic
# =============================================================================
# Handles report persistence and the two listing queries (all reports, and
# reports for one business). Reports are insert-only.
# =============================================================================

import logging

from supabase import Client

from app.exceptions import BusinessNotFoundError, DatabaseError
from core.models.pagination import Page, PageRequest
from core.models.report import Report, ReportCreate
from lib.supabase_client import is_foreign_key_violation

logger = logging.getLogger(__name__)

TABLE = "reports"

# PostgREST embed of the owning business for the all-reports view
WITH_BUSINESS = "*, business:businesses(*)"


class ReportService:
    """
    Service for report operations.

    Provides a clean interface between API routes and the `reports` table.
    """

    def __init__(self, client: Client):
        self.client = client

    def create_report(
        self,
        data: ReportCreate,
        image_url: str,
        video_url: str | None = None,
    ) -> Report:
        """
        Insert one report row.

        Args:
            data: Validated report fields
            image_url: Public location of the uploaded photo (required)
            video_url: Public location of the uploaded video, if any

        Raises:
            BusinessNotFoundError: If business_id references no business (400)
            DatabaseError: For any other store failure
        """
        row = data.to_row(image_url=image_url, video_url=video_url)

        try:
            response = self.client.table(TABLE).insert(row).execute()
        except Exception as e:
            if is_foreign_key_violation(e):
                raise BusinessNotFoundError(data.business_id, status_code=400)
            logger.error(f"Failed to create report: {e}")
            raise DatabaseError("submit report", str(e))

        if not response.data:
            raise DatabaseError("submit report", "Insert returned no data")

        report = Report.model_validate(response.data[0])
        logger.info(f"Created report {report.id} for business {report.business_id}")
        return report

    def list_reports(self, request: PageRequest) -> Page[Report]:
        """List all reports newest first, each with its business embedded."""
        try:
            rows = (
                self.client.table(TABLE)
                .select(WITH_BUSINESS)
                .order("created_at", desc=True)
                .order("id", desc=True)
                .range(request.skip, request.range_end)
                .execute()
            )
            count = (
                self.client.table(TABLE)
                .select("id", count="exact", head=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list reports: {e}")
            raise DatabaseError("fetch reports", str(e))

        reports = [Report.model_validate(row) for row in rows.data or []]
        return Page[Report].build(reports, count.count or 0, request)

    def list_reports_by_business(
        self,
        business_id: int,
        request: PageRequest,
    ) -> Page[Report]:
        """List one business's reports newest first."""
        try:
            rows = (
                self.client.table(TABLE)
                .select("*")
                .eq("business_id", business_id)
                .order("created_at", desc=True)
                .order("id", desc=True)
                .range(request.skip, request.range_end)
                .execute()
            )
            count = (
                self.client.table(TABLE)
                .select("id", count="exact", head=True)
                .eq("business_id", business_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list reports for business {business_id}: {e}")
            raise DatabaseError("fetch reports", str(e))

        reports = [Report.model_validate(row) for row in rows.data or []]
        return Page[Report].build(reports, count.count or 0, request)
