"""
PanelProxy Backend - Google Gemini Service Implementation
==========================================================

What:  Concrete LLM service that forwards a single text prompt to Gemini.
Who:   Called by the aiCommand handler after the license and body checks pass.
How:   google-generativeai SDK: configure with the server-held key, build a
       GenerativeModel, await generate_content_async, read `.text`.

Failure handling:
    No retries and no circuit breaker: every failure ends the request.
    SDK exceptions and unusable responses (e.g. blocked by safety filters,
    where `.text` raises ValueError) become UpstreamServiceError with a
    generic message. The original error is logged, never returned.
"""

import logging
import time
from typing import Optional

import google.generativeai as genai

from app.config import settings
from app.exceptions import UpstreamServiceError
from app.services.llm_base import LLMService

logger = logging.getLogger(__name__)


class GeminiService(LLMService):
    """
    Google Gemini implementation of LLMService.

    The SDK keeps the API key in module-level state, so `genai.configure` is
    only called again when the key changes.
    """

    def __init__(self, model_name: Optional[str] = None, timeout: Optional[float] = None):
        self.model_name = model_name or settings.gemini_model
        self.timeout = timeout or settings.upstream_timeout
        self._configured_key: Optional[str] = None

        logger.info(
            "GeminiService initialized with model=%s, timeout=%.0fs",
            self.model_name,
            self.timeout,
        )

    def _get_model(self, api_key: str):
        if api_key != self._configured_key:
            genai.configure(api_key=api_key)
            self._configured_key = api_key
        return genai.GenerativeModel(self.model_name)

    async def generate_text(self, prompt: str, api_key: str) -> str:
        """
        Send `prompt` to Gemini and return the plain-text response.

        Raises:
            UpstreamServiceError: on any SDK error or empty/blocked response
        """
        start_time = time.time()

        try:
            model = self._get_model(api_key)
            response = await model.generate_content_async(
                prompt,
                request_options={"timeout": self.timeout},
            )
            text = response.text
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                "Gemini call failed after %.0fms: %s: %s",
                duration_ms,
                type(e).__name__,
                str(e),
            )
            raise UpstreamServiceError(
                upstream="gemini",
                context={"error_type": type(e).__name__},
            ) from e

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Gemini completion in %.0fms: prompt %d chars, response %d chars",
            duration_ms,
            len(prompt),
            len(text or ""),
        )
        return text or ""


# ── Singleton Instance ────────────────────────────────────────────────────
gemini_service = GeminiService()
