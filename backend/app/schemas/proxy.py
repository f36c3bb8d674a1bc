"""
PanelProxy Backend - Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models describing the API contract between the plugin panel
       and the proxy.
Why:   Request validation is done by hand in the pipeline (the error messages
       are part of the contract), so these models are used to shape outgoing
       payloads and to document the endpoints in OpenAPI.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AiCommandRequest(BaseModel):
    """Body of POST /api/aiCommand."""
    prompt: str = Field(description="Natural language instruction for the model")
    context: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Optional editor state, serialized ahead of the prompt",
    )


class YouTubeSearchRequest(BaseModel):
    """Body of POST /api/youtubeSearch."""
    query: str = Field(description="Free-text YouTube search query")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AiCommandResponse(BaseModel):
    result: str = Field(description="Plain text returned by Gemini")


class Thumbnails(BaseModel):
    """
    Thumbnail URLs at the three resolutions YouTube reports.

    A resolution missing upstream stays None and is dropped on serialization
    (`exclude_none`), so clients see it as absent rather than null.
    """
    default: Optional[str] = None
    medium: Optional[str] = None
    high: Optional[str] = None


class YouTubeSearchResult(BaseModel):
    title: str = Field(description="Video title, empty if YouTube omitted it")
    url: str = Field(description="https://www.youtube.com/watch?v=<videoId>")
    channel: str = Field(description="Channel title, empty if YouTube omitted it")
    thumbnails: Thumbnails = Field(default_factory=Thumbnails)


class YouTubeSearchResponse(BaseModel):
    results: List[YouTubeSearchResult] = Field(description="At most 10 videos")


class LicenseCheckResult(BaseModel):
    """
    Outcome of the license guard for a single request.

    Not persisted; `reason` is only set when `valid` is False.
    """
    valid: bool
    reason: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body shared by every endpoint.

    Example:
        {"error": "Unauthorized", "message": "Invalid license token"}
    """
    error: str = Field(description="HTTP reason phrase for the failure kind")
    message: str = Field(description="Client-safe description")


class HealthResponse(BaseModel):
    status: str = Field(description="Always 'healthy' when the process answers")
    version: str = Field(description="Application version")
    uptime_seconds: float = Field(description="Seconds since service started")
