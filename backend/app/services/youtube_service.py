"""
PanelProxy Backend - YouTube Data API Service
==============================================

What:  Runs a video search against the YouTube Data API v3 and maps the
       result into the proxy's simplified shape.
Who:   Called by the youtubeSearch handler.
How:   One GET to /youtube/v3/search with httpx; fixed parameters
       (snippet part, videos only, 10 results).

Item mapping:
    snippet.title                   → title     ("" if absent)
    id.videoId                      → url       (watch URL, "" id if absent)
    snippet.channelTitle            → channel   ("" if absent)
    snippet.thumbnails.<res>.url    → thumbnails.<res>  (absent → None)
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.config import settings
from app.exceptions import UpstreamServiceError
from app.schemas.proxy import Thumbnails, YouTubeSearchResult

logger = logging.getLogger(__name__)

SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
WATCH_URL = "https://www.youtube.com/watch?v="
MAX_RESULTS = 10
THUMBNAIL_RESOLUTIONS = ("default", "medium", "high")


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def map_search_item(item: Dict[str, Any]) -> YouTubeSearchResult:
    """Map one `items[]` entry of a search response."""
    item = _as_dict(item)
    snippet = _as_dict(item.get("snippet"))
    thumbnails = _as_dict(snippet.get("thumbnails"))
    video_id = _as_dict(item.get("id")).get("videoId") or ""

    return YouTubeSearchResult(
        title=snippet.get("title") or "",
        url=f"{WATCH_URL}{video_id}",
        channel=snippet.get("channelTitle") or "",
        thumbnails=Thumbnails(**{
            res: _as_dict(thumbnails.get(res)).get("url")
            for res in THUMBNAIL_RESOLUTIONS
        }),
    )


class YouTubeService:
    """
    Thin async client for the search endpoint.

    `transport` is only set by tests (httpx.MockTransport); in production the
    default network transport is used.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout or settings.upstream_timeout
        self._transport = transport

    async def search(self, query: str, api_key: str) -> List[YouTubeSearchResult]:
        """
        Search videos matching `query`.

        Raises:
            UpstreamServiceError: YouTube answered with a non-2xx status.
            httpx.HTTPError: network failure (handled at the handler boundary).
        """
        params = {
            "part": "snippet",
            "q": query,
            "type": "video",
            "maxResults": str(MAX_RESULTS),
            "key": api_key,
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(SEARCH_URL, params=params)

        if not response.is_success:
            logger.error(
                "YouTube API error: %d %s",
                response.status_code,
                response.text,
            )
            raise UpstreamServiceError(
                message="Failed to search YouTube",
                upstream="youtube",
                status=response.status_code,
            )

        data = _as_dict(response.json())
        items = data.get("items") or []
        results = [map_search_item(item) for item in items]

        logger.info("YouTube search returned %d result(s)", len(results))
        return results


# ── Singleton Instance ────────────────────────────────────────────────────
youtube_service = YouTubeService()
