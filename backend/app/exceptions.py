"""
PanelProxy Backend - Error Hierarchy
=====================================

What:  Application-specific errors, one class per failure kind the proxy can
       report to a client.
How:   Each class carries its HTTP status, a fixed `error` label and a
       client-safe `message`. Anything diagnostic goes into `context`, which is
       logged server-side and never serialized.
Who:   The request pipeline returns these as values for expected failures
       (bad method, bad license, bad body, missing key). Upstream services
       raise them for third-party faults.

Exception Hierarchy:
    PanelProxyError (base)             → 500 Internal Server Error
    ├── MethodNotAllowedError          → 405 Method Not Allowed
    ├── UnauthorizedError              → 401 Unauthorized
    ├── BadRequestError                → 400 Bad Request
    ├── ServerConfigurationError       → 500 Internal Server Error
    └── UpstreamServiceError           → 500 Internal Server Error

Every error serializes to the same body shape:
    {"error": "<label>", "message": "<client-safe message>"}
"""

from typing import Any, Dict, Optional


class PanelProxyError(Exception):
    """
    Base exception for all PanelProxy errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(
        self,
        message: str = "An error occurred processing your request",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def to_body(self) -> Dict[str, str]:
        """The `{error, message}` payload sent to the client."""
        return {"error": self.error, "message": self.message}


class MethodNotAllowedError(PanelProxyError):
    """Anything other than POST (or an OPTIONS preflight)."""

    status_code = 405
    error = "Method Not Allowed"

    def __init__(
        self,
        message: str = "Only POST requests are allowed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnauthorizedError(PanelProxyError):
    """
    The license guard rejected the request.

    The message is the guard's reason ("Missing authorization token" or
    "Invalid license token"); it never includes the token itself.
    """

    status_code = 401
    error = "Unauthorized"

    def __init__(
        self,
        message: str = "Invalid license",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class BadRequestError(PanelProxyError):
    """
    Malformed JSON or a missing/invalid required field.

    `field` is recorded in context so logs show which check failed.
    """

    status_code = 400
    error = "Bad Request"

    def __init__(
        self,
        message: str = "Bad request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ServerConfigurationError(PanelProxyError):
    """
    A server-side key needed for the upstream call is not configured.

    Security Note:
        The client message is always "Server configuration error". Which
        key is missing is written to `context` (and the server log) only.
    """

    def __init__(
        self,
        missing_setting: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if missing_setting:
            ctx["missing_setting"] = missing_setting
        super().__init__(message="Server configuration error", context=ctx)
        self.missing_setting = missing_setting


class UpstreamServiceError(PanelProxyError):
    """
    Gemini or YouTube failed, or returned something we could not use.

    Raised by the upstream services. No retry is attempted; the request
    ends with a 500 carrying `message`, which must stay generic.
    """

    def __init__(
        self,
        message: str = "An error occurred processing your request",
        upstream: Optional[str] = None,
        status: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if upstream:
            ctx["upstream"] = upstream
        if status is not None:
            ctx["upstream_status"] = status
        super().__init__(message=message, context=ctx)
        self.upstream = upstream
        self.status = status
