"""
Text generation service.

Orchestrates one "generate text" call for a tenant:
    resolve credential -> select adapter -> invoke -> wrap result

Usage:
    gateway = GenerationGateway(resolver, registry)
    result = await gateway.generate("tenant-123", "Write a follow-up email")
"""
from __future__ import annotations

import time
from dataclasses import dataclass

from ai_gateway.config import get_logger, settings
from ai_gateway.exceptions import (
    GatewayException,
    InvalidRequestError,
    ProviderInvocationError,
)
from ai_gateway.providers.llm import GenerationRequest, ProviderRegistry
from ai_gateway.services.credentials import CredentialResolver
from ai_gateway.utils import clean_optional_text, elapsed_ms

logger = get_logger("services.generation")


@dataclass(frozen=True)
class GenerationResult:
    """Canonical generation result; ``text`` may be empty, never None."""
    text: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text}


class GenerationGateway:
    """Single entry point for tenant text generation."""

    def __init__(self, resolver: CredentialResolver, registry: ProviderRegistry):
        self._resolver = resolver
        self._registry = registry

    async def generate(
        self,
        tenant_id: str | None,
        prompt: str | None,
        system_instruction: str | None = None,
    ) -> GenerationResult:
        """
        Generate text with the tenant's configured provider.

        Raises:
            InvalidRequestError: Missing tenant id or prompt
            NoCredentialConfiguredError: Tenant has no usable settings
            UnsupportedProviderError: Stored provider matches no adapter
            ProviderInvocationError: The vendor call failed (message verbatim)
        """
        if tenant_id is None or not tenant_id.strip():
            raise InvalidRequestError("userId is required")

        credential = await self._resolver.resolve(tenant_id)

        if prompt is None or not prompt.strip():
            raise InvalidRequestError("prompt is required")
        if len(prompt) > settings.MAX_PROMPT_LENGTH:
            raise InvalidRequestError(
                f"prompt exceeds max length of {settings.MAX_PROMPT_LENGTH} characters"
            )

        generator = self._registry.get(credential.provider)

        request = GenerationRequest(
            prompt=prompt,
            model=credential.model,
            api_key=credential.api_key,
            system_instruction=clean_optional_text(system_instruction),
        )

        start = time.perf_counter()
        try:
            text = await generator.invoke(request)
        except GatewayException:
            raise
        except Exception as e:
            logger.error(
                "Generation failed | tenant=%s | provider=%s | model=%s | type=%s | error=%s",
                tenant_id,
                generator.get_provider_name(),
                credential.model,
                type(e).__name__,
                e,
            )
            raise ProviderInvocationError(str(e) or None, details=type(e).__name__) from e

        logger.info(
            "Generation complete | tenant=%s | provider=%s | model=%s | chars=%d | elapsed_ms=%.1f",
            tenant_id,
            generator.get_provider_name(),
            credential.model,
            len(text),
            elapsed_ms(start),
        )
        return GenerationResult(text=text)
