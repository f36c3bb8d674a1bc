"""
PanelProxy Backend - Request ID Middleware
===========================================

What:  Tags each request with a short correlation ID, exposes it to loggers
       through a ContextVar and returns it in the X-Request-ID header.
Why:   The plugin panel can quote the ID when reporting a failed call; the
       server log lines for that call all carry it.

A client-supplied X-Request-ID is reused when it looks sane (printable, at
most 64 characters); otherwise a fresh 8-character ID is generated.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_CLIENT_ID_LENGTH = 64

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def _new_request_id() -> str:
    return str(uuid.uuid4())[:8]


def resolve_request_id(client_value: str) -> str:
    value = (client_value or "").strip()
    if value and len(value) <= MAX_CLIENT_ID_LENGTH and value.isprintable():
        return value
    return _new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns the request ID before anything else runs."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER, ""))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
