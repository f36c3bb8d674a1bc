"""
PanelProxy Backend - Request Pipeline
======================================

What:  The request flow shared by every proxied endpoint.
Why:   aiCommand and youtubeSearch differ only in their required field, their
       server key and the upstream call; the gates in front are identical.
How:   `ProxyHandler.handle(method, headers, body)` walks the steps below and
       returns a finished Starlette response. Subclasses implement `forward()`.

Pipeline (every arrow that leaves the line is terminal):

    START
     ├─ OPTIONS ........................ 200, empty body
     ├─ method != POST ................. 405 MethodNotAllowedError
     ├─ license invalid ................ 401 UnauthorizedError
     ├─ body is not JSON ............... 400 BadRequestError
     ├─ required field missing/blank ... 400 BadRequestError
     ├─ server key not configured ...... 500 ServerConfigurationError
     ├─ forward() raises ............... 500 UpstreamServiceError / generic
     └─ 200 with the shaped body

Steps up to the server-key check report failures as returned error values.
Only `forward()` is allowed to raise; whatever it raises is caught here, logged
with full detail, and turned into a generic 500.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel
from starlette.responses import JSONResponse, Response

from app.config import Settings, settings
from app.exceptions import (
    BadRequestError,
    MethodNotAllowedError,
    PanelProxyError,
    ServerConfigurationError,
    UnauthorizedError,
    UpstreamServiceError,
)
from app.middleware.request_id import request_id_var
from app.services.license_service import LicenseGuard, license_guard

logger = logging.getLogger(__name__)

# Sent on every proxy response, including errors and preflight
CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

INVALID_JSON_MESSAGE = "Invalid JSON in request body"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


Body = Union[bytes, str, None]


def get_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup over any mapping."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def error_response(error: PanelProxyError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_body(),
        headers=CORS_HEADERS,
    )


def parse_json_body(body: Body) -> Tuple[Dict[str, Any], Optional[BadRequestError]]:
    """
    Decode the request body.

    An empty body counts as `{}`. Valid JSON that is not an object also
    yields `{}`, so it fails on the required field rather than as bad JSON.
    """
    if not body:
        return {}, None
    try:
        payload = json.loads(body, parse_constant=_reject_constant)
    except ValueError:
        return {}, BadRequestError(message=INVALID_JSON_MESSAGE)
    if not isinstance(payload, dict):
        return {}, None
    return payload, None


def require_text_field(payload: Dict[str, Any], field: str) -> Optional[BadRequestError]:
    value = payload.get(field)
    if not isinstance(value, str) or not value.strip():
        return BadRequestError(message=f'Missing or invalid "{field}" field', field=field)
    return None


class ProxyHandler(ABC):
    """
    Base class for a proxied endpoint.

    Class attributes:
        name:           Handler name used in logs ("aiCommand")
        required_field: Body field that must be a non-blank string
        api_key_field:  Settings attribute holding the upstream key
    """

    name: str = "proxy"
    required_field: str = ""
    api_key_field: str = ""

    def __init__(
        self,
        guard: Optional[LicenseGuard] = None,
        config: Optional[Settings] = None,
    ):
        self.guard = guard if guard is not None else license_guard
        self.config = config if config is not None else settings

    @abstractmethod
    async def forward(self, payload: Dict[str, Any], api_key: str) -> BaseModel:
        """Call the upstream API and return the shaped success body."""
        ...

    # ── Gates ─────────────────────────────────────────────────────────────

    def check_method(self, method: str) -> Optional[MethodNotAllowedError]:
        if method != "POST":
            return MethodNotAllowedError(context={"method": method})
        return None

    def check_license(self, headers: Mapping[str, str]) -> Optional[UnauthorizedError]:
        result = self.guard.check_header(get_header(headers, "authorization"))
        if not result.valid:
            return UnauthorizedError(message=result.reason or "Invalid license")
        return None

    def resolve_api_key(self) -> Tuple[str, Optional[ServerConfigurationError]]:
        api_key = getattr(self.config, self.api_key_field, "") or ""
        if not api_key:
            return "", ServerConfigurationError(missing_setting=self.api_key_field.upper())
        return api_key, None

    # ── Entry point ───────────────────────────────────────────────────────

    async def handle(self, method: str, headers: Mapping[str, str], body: Body) -> Response:
        if method == "OPTIONS":
            return Response(status_code=200, content=b"", headers=CORS_HEADERS)

        error = self.check_method(method) or self.check_license(headers)
        if error is not None:
            return self._reject(error)

        payload, error = parse_json_body(body)
        if error is None:
            error = require_text_field(payload, self.required_field)
        if error is not None:
            return self._reject(error)

        api_key, error = self.resolve_api_key()
        if error is not None:
            return self._reject(error)

        try:
            shaped = await self.forward(payload, api_key)
        except UpstreamServiceError as e:
            return self._reject(e)
        except Exception as e:
            logger.error(
                "[%s] %s: unexpected error: %s",
                request_id_var.get(""),
                self.name,
                str(e),
                exc_info=True,
            )
            return error_response(UpstreamServiceError())

        return JSONResponse(
            status_code=200,
            content=shaped.model_dump(exclude_none=True),
            headers=CORS_HEADERS,
        )

    def _reject(self, error: PanelProxyError) -> JSONResponse:
        rid = request_id_var.get("")
        if error.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, self.name, error.message, error.context)
        else:
            logger.warning("[%s] %s: %s", rid, self.name, error.message)
        return error_response(error)
