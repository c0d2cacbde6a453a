"""
Gemini text generation adapter.

Uses Google's genai library. The prompt is sent as a single content string
and the system instruction, when present, travels in the generation config.
"""
from __future__ import annotations

from typing import Any

from google import genai
from google.genai import types

from ...config import get_logger
from .interface import GenerationRequest, ProviderKind, TextGenerator

logger = get_logger("llm.gemini")

PROBE_PROMPT = "hi"


class GeminiTextGenerator(TextGenerator):
    """Gemini adapter; one client per call, bound to the tenant key."""

    @staticmethod
    def _default_client(api_key: str) -> genai.Client:
        return genai.Client(api_key=api_key)

    async def invoke(self, request: GenerationRequest) -> str:
        """Generate text with Gemini ``generate_content``."""
        client = self._get_client(request.api_key)

        kwargs: dict[str, Any] = {
            "model": request.model,
            "contents": request.prompt,
        }
        if request.system_instruction is not None:
            kwargs["config"] = types.GenerateContentConfig(
                system_instruction=request.system_instruction,
            )

        response = await client.aio.models.generate_content(**kwargs)

        text = getattr(response, "text", None)
        if not text:
            logger.debug("Gemini returned no text | model=%s", request.model)
            return ""
        return text

    async def probe(self, model: str, api_key: str) -> None:
        """Generate a single token from a trivial prompt."""
        client = self._get_client(api_key)
        await client.aio.models.generate_content(
            model=model,
            contents=PROBE_PROMPT,
            config=types.GenerateContentConfig(max_output_tokens=1),
        )

    def get_provider_kind(self) -> ProviderKind:
        return ProviderKind.GEMINI
