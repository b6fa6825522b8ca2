# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every client-visible failure carries an `error` message (shown verbatim by
# the dashboard) and a machine-readable `code`.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INVALID_FILE_TYPE_MESSAGE = "Invalid file type. Only images and videos are allowed."
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class OvaSightException(Exception):
    """
    Base exception for the OvaSight API.

    All custom exceptions inherit from this class. `message` is returned to
    the client; `details` are only logged.
    """

    def __init__(
        self,
        message: str,
        code: str = "OVASIGHT_ERROR",
        status_code: int = 500,
        errors: list[dict[str, Any]] | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.errors = errors
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "error": self.message,
            "code": self.code,
        }
        if self.errors is not None:
            result["errors"] = self.errors
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationFailedError(OvaSightException):
    """Raised when a request DTO fails validation."""

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__(
            message="Validation failed",
            code="VALIDATION_ERROR",
            status_code=400,
            errors=errors,
        )


class ImageRequiredError(OvaSightException):
    """Raised when a report is submitted without photo evidence."""

    def __init__(self):
        super().__init__(
            message="Image is required",
            code="IMAGE_REQUIRED",
            status_code=400,
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidFileTypeError(OvaSightException):
    """Raised when an uploaded file's declared type is not allowed for its field."""

    def __init__(self, field: str, content_type: str | None):
        super().__init__(
            message=INVALID_FILE_TYPE_MESSAGE,
            code="INVALID_FILE_TYPE",
            status_code=400,
            details={"field": field, "content_type": content_type},
        )


class UnexpectedFileFieldError(OvaSightException):
    """Raised for file fields other than image/video, or more than one file per field."""

    def __init__(self, field: str):
        super().__init__(
            message=f"Unexpected field: {field}",
            code="UNEXPECTED_FIELD",
            status_code=400,
            details={"field": field},
        )


class FileTooLargeError(OvaSightException):
    """Raised when an uploaded file exceeds its per-field ceiling."""

    def __init__(self, field: str, size: int, max_size: int):
        super().__init__(
            message=f"File too large: {field} must be at most {max_size} bytes",
            code="FILE_TOO_LARGE",
            status_code=413,
            details={"field": field, "size": size, "max_size": max_size},
        )


class PayloadTooLargeError(OvaSightException):
    """Raised when a request body exceeds the configured ceiling."""

    def __init__(self, max_size: int):
        super().__init__(
            message="Request body too large",
            code="PAYLOAD_TOO_LARGE",
            status_code=413,
            details={"max_size": max_size},
        )


class StorageUploadError(OvaSightException):
    """Raised when writing a file to object storage fails."""

    def __init__(self, key: str, error: str):
        super().__init__(
            message="Failed to upload file",
            code="STORAGE_UPLOAD_ERROR",
            status_code=500,
            details={"key": key, "error": error},
        )


# =============================================================================
# Store Exceptions
# =============================================================================

class BusinessNotFoundError(OvaSightException):
    """
    Raised when a business id does not exist.

    Report submission maps this to 400 (bad reference in the payload);
    direct lookups use 404.
    """

    def __init__(self, business_id: int, status_code: int = 404):
        super().__init__(
            message="Business not found",
            code="BUSINESS_NOT_FOUND",
            status_code=status_code,
            details={"business_id": business_id},
        )


class DatabaseError(OvaSightException):
    """Raised when a store query fails for infrastructure reasons."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=f"Failed to {operation}",
            code="DATABASE_ERROR",
            status_code=500,
            details={"operation": operation, "error": error},
        )


# =============================================================================
# Rate Limiting
# =============================================================================

class RateLimitExceededError(OvaSightException):
    """Raised when a client exhausts a rate limit policy."""

    def __init__(self, policy: str, message: str, retry_after: int):
        super().__init__(
            message=message,
            code="RATE_LIMITED",
            status_code=429,
            details={"policy": policy},
            headers={"Retry-After": str(retry_after)},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def ovasight_exception_handler(
    request: Request,
    exc: OvaSightException
) -> JSONResponse:
    """Convert OvaSightException to JSON response."""
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: "
            f"[{exc.code}] {exc.message} {exc.details}"
        )
    else:
        logger.info(f"{request.method} {request.url.path} rejected: [{exc.code}] {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


def format_validation_errors(raw_errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Flatten pydantic error dicts into `{field, message, code}` issues.

    Body-location prefixes ("body", "query") are dropped so the field path
    matches the request's own field names.
    """
    issues = []
    for err in raw_errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        issues.append({
            "field": ".".join(loc),
            "message": err.get("msg", "Invalid value"),
            "code": err.get("type", "invalid"),
        })
    return issues


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI request validation errors as 400 with field issues."""
    return JSONResponse(
        status_code=400,
        content=ValidationFailedError(format_validation_errors(exc.errors())).to_dict(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the stack and return a generic 500."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": INTERNAL_ERROR_MESSAGE, "code": "INTERNAL_ERROR"},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Give framework-raised HTTP errors (404 route, 405, malformed multipart) the same shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail), "code": f"HTTP_{exc.status_code}"},
        headers=getattr(exc, "headers", None),
    )
