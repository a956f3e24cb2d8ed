"""Gemini boundary used by the orchestrator."""

import logging
from typing import Optional, Protocol

from google import genai
from google.genai import types

from briefos.errors import UpstreamTransportFailure

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Anything that turns a prompt into raw model text."""

    async def generate_text(self, prompt: str, use_search: bool = False) -> Optional[str]:
        ...


class GeminiClient:
    """
    Thin async wrapper around google-genai.

    Provider and network exceptions are re-raised as
    UpstreamTransportFailure. Timeouts are enforced by the caller.
    """

    def __init__(self, api_key: str, model: str = "gemini-2.5-flash"):
        self.model = model
        self._api_key = api_key
        self._client: Optional[genai.Client] = None

    @property
    def client(self) -> genai.Client:
        """Lazy load the Gemini client."""
        if self._client is None:
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    async def generate_text(self, prompt: str, use_search: bool = False) -> Optional[str]:
        config = None
        if use_search:
            config = types.GenerateContentConfig(
                tools=[types.Tool(google_search=types.GoogleSearch())],
            )

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
                config=config,
            )
        except Exception as e:
            logger.error(f"Gemini call failed ({type(e).__name__}): {e}")
            raise UpstreamTransportFailure(
                "AI provider request failed.",
                details=f"{type(e).__name__}: {e}",
            ) from e

        text = response.text
        logger.info(f"Gemini response received ({len(text or '')} chars, model={self.model})")
        return text


def gemini_factory(model: str):
    """Return a factory that builds a GeminiClient for a resolved key."""
    def build(api_key: str) -> GeminiClient:
        return GeminiClient(api_key=api_key, model=model)
    return build
