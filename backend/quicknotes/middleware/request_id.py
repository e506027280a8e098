"""
QuickNotes Backend — Request ID Middleware
============================================

What:  Tags every request with a short correlation ID and echoes it back
       in the X-Request-ID response header.
How:   Reuses a client-supplied X-Request-ID when present, otherwise
       generates one; stores it in a ContextVar so exception handlers and
       log lines can include it.

Unhandled exceptions that escape the app are turned into the generic 500
body here, inside this middleware, so that response carries the header too.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def internal_error_response() -> JSONResponse:
    """Generic 500 body; never includes exception details."""
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": INTERNAL_ERROR_MESSAGE,
            "request_id": request_id_var.get(""),
        },
    )


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a request ID, exposes it via ContextVar and request.state."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("[%s] Unexpected error: %s", rid, str(e), exc_info=True)
            response = internal_error_response()

        response.headers[REQUEST_ID_HEADER] = rid
        return response
