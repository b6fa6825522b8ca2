# =============================================================================
# app/middleware.py - HTTP Middleware
# =============================================================================
# - BodySizeLimitMiddleware: caps request bodies before they are parsed
#   (10MB for JSON / url-encoded, image + video ceilings for multipart)
# - request_logging_middleware: one log line per request, plus the basic
#   security headers on every response
# =============================================================================

import logging
import time

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.exceptions import PayloadTooLargeError

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than the configured ceiling.

    A declared Content-Length over the limit is answered with 413 before
    the body is read. Bodies without a usable Content-Length (chunked
    uploads) are counted as they stream; crossing the limit raises a 413
    HTTPException from inside whichever handler is reading the body.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int, max_multipart_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes
        self.max_multipart_bytes = max_multipart_bytes

    def limit_for(self, scope: Scope) -> int:
        headers = dict(scope.get("headers") or [])
        content_type = headers.get(b"content-type", b"").decode("latin-1").lower()
        if content_type.startswith("multipart/form-data"):
            return self.max_multipart_bytes
        return self.max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = self.limit_for(scope)
        headers = dict(scope.get("headers") or [])
        declared = headers.get(b"content-length")

        if declared is not None:
            try:
                declared_size = int(declared)
            except ValueError:
                declared_size = None
            if declared_size is not None and declared_size > limit:
                logger.info(f"Rejected {scope.get('path')}: body of {declared_size} bytes exceeds {limit}")
                response = JSONResponse(
                    status_code=413,
                    content=PayloadTooLargeError(limit).to_dict(),
                )
                await response(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    raise HTTPException(status_code=413, detail=PayloadTooLargeError(limit).message)
            return message

        await self.app(scope, limited_receive, send)


async def request_logging_middleware(request: Request, call_next):
    """Log method, path, status and duration; add security headers."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)

    logger.info(
        f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms"
    )
    return response
