"""Middleware — request IDs for log records and error envelopes, security headers."""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def current_request_id() -> str:
    """Request ID of the request being served, or "-" outside a request."""
    return request_id_var.get() or "-"


def install_request_id_logging() -> None:
    """Stamp every log record with ``request_id``.

    Uses the record factory rather than a handler filter so records from
    any logger carry the attribute, whatever handlers the server installs.
    Safe to call more than once.
    """
    base_factory = logging.getLogRecordFactory()
    if getattr(base_factory, "_stamps_request_id", False):
        return

    def factory(*args, **kwargs) -> logging.LogRecord:
        record = base_factory(*args, **kwargs)
        record.request_id = current_request_id()
        return record

    factory._stamps_request_id = True  # type: ignore[attr-defined]
    logging.setLogRecordFactory(factory)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind a request ID for the duration of each request.

    Takes ``X-Request-ID`` from the caller or generates a UUID4, exposes it
    through ``current_request_id()`` while the request runs and echoes it
    on the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = rid
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add standard security headers to every response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
