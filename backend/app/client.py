"""
PanelProxy Backend - Async Client
==================================

What:  Python counterpart of the panel's fetch calls, for scripts and
       integration checks against a deployed proxy.
How:   httpx.AsyncClient; every call sends the license token as a bearer
       header and a JSON body. Any non-2xx response raises PanelProxyAPIError
       carrying the server's `message`.

Usage:
    async with PanelProxyClient("https://proxy.example.com", token) as client:
        reply = await client.call_ai_command("Add markers to the selected clips",
                                             context={"activeSequence": "Sequence 1"})
        print(reply["result"])

        videos = await client.search_youtube("premiere pro tutorial")
        for video in videos["results"]:
            print(video["title"], video["url"])
"""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


class PanelProxyAPIError(Exception):
    """A proxy endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, error: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.error = error
        super().__init__(f"API Error: {message}")


class PanelProxyClient:
    """
    Client for the two proxy endpoints.

    Args:
        base_url:  Server root, e.g. "https://proxy.example.com"
        token:     License token sent as `Authorization: Bearer <token>`
        api_prefix: Path prefix the routes are mounted under
        transport: Optional httpx transport (tests pass ASGITransport/MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        api_prefix: str = "/api",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_prefix = api_prefix.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
        )

    async def __aenter__(self) -> "PanelProxyClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def call_ai_command(
        self, prompt: str, context: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """POST /aiCommand. Returns `{"result": "..."}`."""
        return await self._post("aiCommand", {"prompt": prompt, "context": context})

    async def search_youtube(self, query: str) -> Dict[str, Any]:
        """POST /youtubeSearch. Returns `{"results": [...]}`."""
        return await self._post("youtubeSearch", {"query": query})

    async def _post(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = await self._client.post(f"{self.api_prefix}/{endpoint}", json=payload)

        if not response.is_success:
            try:
                data = response.json()
            except ValueError:
                data = {}
            if not isinstance(data, dict):
                data = {}
            message = data.get("message") or response.reason_phrase
            logger.error("Error calling %s: %d %s", endpoint, response.status_code, message)
            raise PanelProxyAPIError(response.status_code, message, data.get("error"))

        return response.json()
