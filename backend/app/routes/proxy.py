"""
PanelProxy Backend - Proxy Route Handlers
==========================================

What:  Mounts POST /api/aiCommand and POST /api/youtubeSearch.
How:   Routes are thin: they hand the raw method, headers and body to the
       matching ProxyHandler, which returns the finished response.

Every other method on these paths is routed to the same handler, so OPTIONS
gets the preflight answer and everything else gets the JSON 405 body rather
than Starlette's plain-text one.

Request example:
    POST /api/aiCommand
    Authorization: Bearer <license-token>
    Content-Type: application/json

    {"prompt": "Create a new sequence called \"My Edit\"", "context": {...}}
"""

from fastapi import APIRouter, Request
from starlette.responses import Response

from app.schemas.proxy import (
    AiCommandRequest,
    AiCommandResponse,
    ErrorResponse,
    YouTubeSearchRequest,
    YouTubeSearchResponse,
)
from app.services.ai_command import ai_command_handler
from app.services.youtube_search import youtube_search_handler

router = APIRouter(prefix="/api", tags=["Proxy"])

# Non-POST methods that still reach the handler (OPTIONS → preflight, rest → 405)
OTHER_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]

ERROR_RESPONSES = {
    400: {"description": "Malformed JSON or missing field", "model": ErrorResponse},
    401: {"description": "Missing or invalid license token", "model": ErrorResponse},
    405: {"description": "Method other than POST", "model": ErrorResponse},
    500: {"description": "Server configuration or upstream failure", "model": ErrorResponse},
}


@router.post(
    "/aiCommand",
    response_model=AiCommandResponse,
    responses=ERROR_RESPONSES,
    summary="Generate text with Gemini",
    description="Forwards the prompt (and optional context) to Google Gemini.",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": AiCommandRequest.model_json_schema()}},
        }
    },
)
@router.api_route("/aiCommand", methods=OTHER_METHODS, include_in_schema=False)
async def ai_command(request: Request) -> Response:
    body = await request.body()
    return await ai_command_handler.handle(request.method, request.headers, body)


@router.post(
    "/youtubeSearch",
    response_model=YouTubeSearchResponse,
    responses=ERROR_RESPONSES,
    summary="Search YouTube videos",
    description="Runs the query against the YouTube Data API v3 (10 videos max).",
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": YouTubeSearchRequest.model_json_schema()}},
        }
    },
)
@router.api_route("/youtubeSearch", methods=OTHER_METHODS, include_in_schema=False)
async def youtube_search(request: Request) -> Response:
    body = await request.body()
    return await youtube_search_handler.handle(request.method, request.headers, body)
