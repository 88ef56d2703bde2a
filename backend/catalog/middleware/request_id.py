"""
Catalog Backend — Request ID Middleware
=========================================

What:  Tags each request with a short correlation ID.
Why:   The access log, service log lines and the error page's
       "Request ID" footer all print it, so a user quoting the ID from an
       error page leads straight to the matching log lines.
How:   A client-supplied X-Request-ID is reused only when it looks like an
       ID (see REQUEST_ID_PATTERN); anything else is replaced by a fresh one,
       since the value is written verbatim into logs and the error page.

The ID lives in `request_id_var` for the duration of the request and is
reset afterwards, so work running after the response (lifespan, background
tasks) never logs a stale ID.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Letters, digits, '-' and '_', up to 64 characters
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    """8 hex characters; enough to tell requests apart in the logs."""
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: Optional[str]) -> str:
    """Reuse a well-formed client ID, otherwise generate one."""
    if supplied and REQUEST_ID_PATTERN.fullmatch(supplied):
        return supplied
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns the request ID and echoes it in the X-Request-ID response header."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid

        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
