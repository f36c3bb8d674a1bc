"""
PanelProxy Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment is pinned BEFORE any `app` import so the module-level
       singletons (settings, license_guard, handlers) see test values.

Fixtures:
    ├── guard:            LicenseGuard with the two test tokens
    ├── test_settings:    Settings with both upstream keys configured
    ├── auth_headers:     Valid bearer + JSON content type
    ├── fake_llm:         LLMService stand-in returning canned text
    ├── youtube_payload:  Two-item YouTube search response
    └── test_client:      HTTPX AsyncClient wired to the FastAPI app
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

os.environ["GEMINI_API_KEY"] = "test-gemini-key"
os.environ["YOUTUBE_API_KEY"] = "test-youtube-key"
os.environ["LICENSE_TOKENS"] = "tok-alpha, tok-beta"
os.environ["DEVELOPMENT_MODE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

VALID_TOKEN = "tok-alpha"


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def guard():
    from app.services.license_service import LicenseGuard
    return LicenseGuard(["tok-alpha", "tok-beta"])


@pytest.fixture
def test_settings():
    from app.config import Settings
    return Settings(
        gemini_api_key="test-gemini-key",
        youtube_api_key="test-youtube-key",
        license_tokens="tok-alpha, tok-beta",
        development_mode=False,
    )


@pytest.fixture
def auth_headers():
    return {
        "Authorization": f"Bearer {VALID_TOKEN}",
        "Content-Type": "application/json",
    }


@pytest.fixture
def fake_llm():
    """
    LLMService stand-in.

    Usage:
        fake_llm.generate_text.return_value = "Done"
        fake_llm.generate_text.assert_awaited_once_with(prompt, "test-gemini-key")
    """
    from app.services.llm_base import LLMService
    llm = MagicMock(spec=LLMService)
    llm.generate_text = AsyncMock(return_value="Sequence created")
    return llm


@pytest.fixture
def youtube_payload():
    """Search response with one complete item and one sparse item."""
    return {
        "kind": "youtube#searchListResponse",
        "items": [
            {
                "id": {"kind": "youtube#video", "videoId": "abc123"},
                "snippet": {
                    "title": "Premiere Pro Tutorial",
                    "channelTitle": "Editing Channel",
                    "thumbnails": {
                        "default": {"url": "https://i.ytimg.com/vi/abc123/default.jpg"},
                        "medium": {"url": "https://i.ytimg.com/vi/abc123/mqdefault.jpg"},
                        "high": {"url": "https://i.ytimg.com/vi/abc123/hqdefault.jpg"},
                    },
                },
            },
            {
                "id": {"kind": "youtube#video", "videoId": "xyz789"},
                "snippet": {
                    "title": "Color Grading Basics",
                    "thumbnails": {
                        "default": {"url": "https://i.ytimg.com/vi/xyz789/default.jpg"},
                    },
                },
            },
        ],
    }


@pytest_asyncio.fixture
async def test_client():
    """
    Async HTTP client talking to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
