# =============================================================================
# client/api.py - HTTP Client for the OvaSight API
# =============================================================================
# Thin httpx wrapper used by dashboards and scripts.
#
# Usage:
#   with OvaSightClient("http://localhost:4000") as api:
#       business = api.create_business(BusinessCreate(...))
#       page = api.list_reports_by_business(business.id, page=1, limit=12)
#
# Any non-2xx response raises ApiError whose message is the server's `error`
# field verbatim, ready to show in a banner.
# =============================================================================

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import httpx

from core.models.business import Business, BusinessCreate
from core.models.pagination import Page
from core.models.report import Report

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 5_000_000
MAX_VIDEO_BYTES = 50_000_000


class ApiError(Exception):
    """A request the server answered with an error status."""

    def __init__(self, status_code: int, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.errors = errors or []


class MediaTooLargeError(ValueError):
    """A file failed the client-side size check; nothing was sent."""


@dataclass(frozen=True)
class MediaFile:
    """An in-memory file to attach to a report."""

    filename: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)

    def as_multipart(self) -> tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type)


@dataclass(frozen=True)
class ReportSubmission:
    """Everything a business owner enters in the report form."""

    business_id: int
    sales: Decimal
    expenses: Decimal
    customer_count: int
    image: MediaFile
    video: MediaFile | None = None
    notes: str | None = None

    def check_media_sizes(self) -> None:
        if self.image.size > MAX_IMAGE_BYTES:
            raise MediaTooLargeError("Image file size must be less than 5MB")
        if self.video is not None and self.video.size > MAX_VIDEO_BYTES:
            raise MediaTooLargeError("Video file size must be less than 50MB")

    def form_fields(self) -> dict[str, str]:
        fields = {
            "sales": str(self.sales),
            "expenses": str(self.expenses),
            "customerCount": str(self.customer_count),
            "businessId": str(self.business_id),
        }
        if self.notes:
            fields["notes"] = self.notes
        return fields

    def form_files(self) -> dict[str, tuple[str, bytes, str]]:
        files = {"image": self.image.as_multipart()}
        if self.video is not None:
            files["video"] = self.video.as_multipart()
        return files


class OvaSightClient:
    """Synchronous client for the businesses and reports endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> "OvaSightClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _request(self, method: str, url: str, fallback_error: str, **kwargs) -> Any:
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise ApiError(0, fallback_error)

        if response.is_success:
            return response.json()

        message = fallback_error
        errors = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("error") or fallback_error
            errors = body.get("errors")
        elif response.text and response.status_code == 429:
            message = response.text

        raise ApiError(response.status_code, message, errors)

    # -------------------------------------------------------------------------
    # Businesses
    # -------------------------------------------------------------------------

    def create_business(self, data: BusinessCreate) -> Business:
        body = self._request(
            "POST",
            "/api/businesses",
            "Failed to create business",
            json=data.model_dump(by_alias=True),
        )
        return Business.model_validate(body)

    def list_businesses(self, page: int = 1, limit: int = 10) -> Page[Business]:
        body = self._request(
            "GET",
            "/api/businesses",
            "Failed to fetch businesses",
            params={"page": page, "limit": limit},
        )
        return Page[Business].model_validate(body)

    def get_business(self, business_id: int) -> Business:
        body = self._request("GET", f"/api/businesses/{business_id}", "Failed to fetch business")
        return Business.model_validate(body)

    # -------------------------------------------------------------------------
    # Reports
    # -------------------------------------------------------------------------

    def create_report(self, submission: ReportSubmission) -> Report:
        """
        Submit a report as multipart form data.

        Raises:
            MediaTooLargeError: Before sending, if a file is over its limit
            ApiError: If the server rejects the submission
        """
        submission.check_media_sizes()
        body = self._request(
            "POST",
            "/api/reports",
            "Failed to submit report",
            data=submission.form_fields(),
            files=submission.form_files(),
        )
        return Report.model_validate(body)

    def list_reports(self, page: int = 1, limit: int = 10) -> Page[Report]:
        body = self._request(
            "GET",
            "/api/reports",
            "Failed to fetch reports",
            params={"page": page, "limit": limit},
        )
        return Page[Report].model_validate(body)

    def list_reports_by_business(
        self,
        business_id: int,
        page: int = 1,
        limit: int = 10,
    ) -> Page[Report]:
        body = self._request(
            "GET",
            f"/api/reports/business/{business_id}",
            "Failed to fetch reports",
            params={"page": page, "limit": limit},
        )
        return Page[Report].model_validate(body)
