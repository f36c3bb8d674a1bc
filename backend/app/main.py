"""
PanelProxy Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                     FastAPI App                          │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────────┐ ┌──────────┐              │
    │  │ Req ID   │→│ CORS headers │→│ Logging  │              │
    │  └──────────┘ └──────────────┘ └──────────┘              │
    │                                                          │
    │  Routes:                                                 │
    │  ┌──────────────────┐ ┌──────────────────────┐ ┌───────┐ │
    │  │ /api/aiCommand   │ │ /api/youtubeSearch   │ │/health│ │
    │  └──────────────────┘ └──────────────────────┘ └───────┘ │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, warn about unset upstream keys, log the
              license mode.
    Shutdown: nothing to release; the proxy holds no connections.
"""

import logging
import sys
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.exceptions import PanelProxyError, UpstreamServiceError
from app.middleware.cors import CORSHeadersMiddleware
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import health, proxy
from app.services.license_service import license_guard
from app.services.proxy_pipeline import CORS_HEADERS

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: 2024-01-15T12:00:00 [INFO] app.services.gemini_service: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # httpx logs full request URLs at INFO, which includes the YouTube key
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("PanelProxy Backend %s starting up...", __version__)

    # Not fatal: the affected endpoint answers 500 until the key is set
    for name in settings.missing_upstream_keys():
        logger.warning("%s is not set; its endpoint will return a configuration error", name)

    if license_guard.bypass_enabled:
        logger.warning("DEVELOPMENT_MODE with empty LICENSE_TOKENS: license check disabled")
    else:
        logger.info("License whitelist: %d token(s)", len(license_guard.whitelist))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("PanelProxy Backend shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Keep the `{error, message}` body for anything that escapes a route.

    The proxy handlers already convert their own failures, so these only
    fire for framework errors (unknown path) or bugs.
    """

    @app.exception_handler(PanelProxyError)
    async def handle_proxy_error(request: Request, exc: PanelProxyError):
        rid = request_id_var.get("")
        logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_body(),
            headers=CORS_HEADERS,
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        try:
            label = HTTPStatus(exc.status_code).phrase
        except ValueError:
            label = "Error"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": label, "message": str(exc.detail)},
            headers={**CORS_HEADERS, **(exc.headers or {})},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error: %s",
            rid,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=UpstreamServiceError().to_body(),
            headers=CORS_HEADERS,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="PanelProxy API",
        description=(
            "License-gated proxy for an editor plugin panel. Forwards prompts to "
            "Google Gemini and searches to the YouTube Data API, keeping API keys "
            "on the server."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Last added = first to execute: RequestID → CORS headers → Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CORSHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(proxy.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
