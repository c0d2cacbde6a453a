"""
Anthropic text generation adapter.

Uses the official async Anthropic client and the Messages API. The system
instruction travels in the dedicated ``system`` field and the response is
a list of typed content blocks, of which only the first text block is read.
"""
from __future__ import annotations

from typing import Any

import anthropic

from ...config import get_logger
from .interface import GenerationRequest, ProviderKind, TextGenerator, close_client

logger = get_logger("llm.anthropic")

# The Messages API requires an explicit output bound
MAX_OUTPUT_TOKENS = 4096
PROBE_PROMPT = "hi"


class AnthropicTextGenerator(TextGenerator):
    """Anthropic adapter; one client per call, closed afterwards."""

    @staticmethod
    def _default_client(api_key: str) -> anthropic.AsyncAnthropic:
        return anthropic.AsyncAnthropic(api_key=api_key)

    async def invoke(self, request: GenerationRequest) -> str:
        """Generate text with ``messages.create``."""
        client = self._get_client(request.api_key)

        kwargs: dict[str, Any] = {
            "model": request.model,
            "max_tokens": MAX_OUTPUT_TOKENS,
            "messages": [{"role": "user", "content": request.prompt}],
        }
        if request.system_instruction is not None:
            kwargs["system"] = request.system_instruction

        try:
            response = await client.messages.create(**kwargs)
        finally:
            await close_client(client)

        return self._extract_text(response, request.model)

    @staticmethod
    def _extract_text(response: Any, model: str) -> str:
        """Return the first text block's text; tool calls etc. are skipped."""
        for block in getattr(response, "content", None) or []:
            if getattr(block, "type", None) == "text":
                return getattr(block, "text", None) or ""
        logger.debug("Anthropic returned no text block | model=%s", model)
        return ""

    async def probe(self, model: str, api_key: str) -> None:
        """Request a single output token; also validates the model id."""
        client = self._get_client(api_key)
        try:
            await client.messages.create(
                model=model,
                max_tokens=1,
                messages=[{"role": "user", "content": PROBE_PROMPT}],
            )
        finally:
            await close_client(client)

    def get_provider_kind(self) -> ProviderKind:
        return ProviderKind.ANTHROPIC
