"""
aiCommand handler: forwards a prompt (plus optional editor context) to Gemini
and returns the generated text as `{"result": "..."}`.
"""

import json
from typing import Any, Dict, Optional

from app.config import Settings
from app.schemas.proxy import AiCommandResponse
from app.services.gemini_service import gemini_service
from app.services.license_service import LicenseGuard
from app.services.llm_base import LLMService
from app.services.proxy_pipeline import ProxyHandler


def build_prompt(prompt: str, context: Any = None) -> str:
    """
    Embed `context` ahead of the user's prompt.

    The context is serialized as compact JSON:
        Context: {"activeSequence":"Sequence 1"}

        User Request: Add markers to the selected clips

    Null and falsy scalars (false, 0, "") are skipped; empty objects and
    arrays are still embedded.
    """
    if context is None:
        return prompt
    if not isinstance(context, (dict, list)) and not context:
        return prompt
    serialized = json.dumps(context, separators=(",", ":"), ensure_ascii=False)
    return f"Context: {serialized}\n\nUser Request: {prompt}"


class AiCommandHandler(ProxyHandler):
    name = "aiCommand"
    required_field = "prompt"
    api_key_field = "gemini_api_key"

    def __init__(
        self,
        llm: Optional[LLMService] = None,
        guard: Optional[LicenseGuard] = None,
        config: Optional[Settings] = None,
    ):
        super().__init__(guard=guard, config=config)
        self.llm = llm if llm is not None else gemini_service

    async def forward(self, payload: Dict[str, Any], api_key: str) -> AiCommandResponse:
        full_prompt = build_prompt(payload["prompt"], payload.get("context"))
        text = await self.llm.generate_text(full_prompt, api_key)
        return AiCommandResponse(result=text)


ai_command_handler = AiCommandHandler()
