"""
PanelProxy Backend - Abstract LLM Service Interface
====================================================

What:  Abstract base class for the generative-text upstream used by aiCommand.
Why:   The aiCommand handler only needs "prompt in, text out"; keeping that
       behind an interface lets tests substitute a fake and leaves room for
       another provider.
How:   Concrete implementations inherit from LLMService and implement
       generate_text().
"""

from abc import ABC, abstractmethod


class LLMService(ABC):
    """
    Abstract interface for single-prompt text generation.

    Contract:
        - generate_text() sends one prompt string and returns plain text
        - The API key is passed per call; the proxy checks it is configured
          before calling
        - No retries; any provider error is raised as UpstreamServiceError
    """

    @abstractmethod
    async def generate_text(self, prompt: str, api_key: str) -> str:
        """
        Generate a completion for a single prompt.

        Args:
            prompt:  The full prompt, context already embedded.
            api_key: Server-held provider key. Never logged.

        Returns:
            str: The model's text response.

        Raises:
            UpstreamServiceError: The provider failed or returned no text.
        """
        ...
