"""
PanelProxy Backend - Fixed CORS Headers Middleware
===================================================

What:  Stamps the same three CORS headers on every response.
Why:   The plugin panel calls from an arbitrary origin, and the contract is a
       fixed header set rather than per-origin negotiation. Starlette's
       CORSMiddleware answers preflight itself with a "OK" body; here preflight
       is left to the proxy handlers, which reply 200 with an empty body.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.services.proxy_pipeline import CORS_HEADERS


class CORSHeadersMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response
