"""
OpenAI text generation adapter.

Uses the official async OpenAI client and the chat completions API. The
system instruction, when present, is prepended as a system-role message.
"""
from __future__ import annotations

from typing import Any

import openai

from ...config import get_logger
from .interface import GenerationRequest, ProviderKind, TextGenerator, close_client

logger = get_logger("llm.openai")


class OpenAITextGenerator(TextGenerator):
    """OpenAI adapter; one client per call, closed afterwards."""

    @staticmethod
    def _default_client(api_key: str) -> openai.AsyncOpenAI:
        return openai.AsyncOpenAI(api_key=api_key)

    @staticmethod
    def build_messages(request: GenerationRequest) -> list[dict[str, str]]:
        """Build the ordered role-tagged message list."""
        messages: list[dict[str, str]] = []
        if request.system_instruction is not None:
            messages.append({"role": "system", "content": request.system_instruction})
        messages.append({"role": "user", "content": request.prompt})
        return messages

    async def invoke(self, request: GenerationRequest) -> str:
        """Generate text with ``chat.completions.create``."""
        client = self._get_client(request.api_key)
        try:
            response = await client.chat.completions.create(
                model=request.model,
                messages=self.build_messages(request),
            )
        finally:
            await close_client(client)

        return self._extract_text(response, request.model)

    @staticmethod
    def _extract_text(response: Any, model: str) -> str:
        """Take the first choice's message content, or ""."""
        choices = getattr(response, "choices", None) or []
        if not choices:
            logger.debug("OpenAI returned no choices | model=%s", model)
            return ""
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None) if message is not None else None
        return content or ""

    async def probe(self, model: str, api_key: str) -> None:
        """
        List models with the tenant key.

        Authenticates without spending tokens; the model id is not checked.
        """
        client = self._get_client(api_key)
        try:
            await client.models.list()
        finally:
            await close_client(client)

    def get_provider_kind(self) -> ProviderKind:
        return ProviderKind.OPENAI
