"""
PanelProxy Backend - Health Check Route
========================================

What:  Liveness probe for the hosting platform.
How:   Answers from process state only. It does not call Gemini or YouTube
       (that would spend quota) and does not say which keys are configured.
"""

import time

from fastapi import APIRouter

from app import __version__
from app.schemas.proxy import HealthResponse

router = APIRouter(tags=["Health"])

# Set once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
