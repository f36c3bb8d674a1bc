"""
youtubeSearch handler: runs the client's query against the YouTube Data API
and returns `{"results": [...]}` with at most 10 simplified videos.
"""

from typing import Any, Dict, Optional

from app.config import Settings
from app.schemas.proxy import YouTubeSearchResponse
from app.services.license_service import LicenseGuard
from app.services.proxy_pipeline import ProxyHandler
from app.services.youtube_service import YouTubeService, youtube_service


class YouTubeSearchHandler(ProxyHandler):
    name = "youtubeSearch"
    required_field = "query"
    api_key_field = "youtube_api_key"

    def __init__(
        self,
        youtube: Optional[YouTubeService] = None,
        guard: Optional[LicenseGuard] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(guard=guard, config=config)
        self.youtube = youtube if youtube is not None else youtube_service

    async def forward(self, payload: Dict[str, Any], api_key: str) -> YouTubeSearchResponse:
        results = await self.youtube.search(payload["query"], api_key)
        return YouTubeSearchResponse(results=results)


youtube_search_handler = YouTubeSearchHandler()
