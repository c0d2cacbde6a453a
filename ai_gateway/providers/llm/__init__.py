"""
Text generation providers - registry of vendor adapters.

Adapters are selected per request from the tenant's stored provider
discriminator through a lookup table, never through a chain of conditionals.
"""
from __future__ import annotations

from typing import Mapping

from ai_gateway.config import get_logger
from ai_gateway.exceptions import UnsupportedProviderError

from .anthropic_impl import AnthropicTextGenerator
from .gemini_impl import GeminiTextGenerator
from .interface import GenerationRequest, ProviderKind, TextGenerator
from .openai_impl import OpenAITextGenerator

logger = get_logger("llm.provider")


class ProviderRegistry:
    """Lookup table from ``ProviderKind`` to its ``TextGenerator``."""

    def __init__(self, generators: Mapping[ProviderKind, TextGenerator]):
        self._generators = dict(generators)

    def get(self, provider: ProviderKind | str | None) -> TextGenerator:
        """
        Select the adapter for a provider discriminator.

        Raises:
            UnsupportedProviderError: If no adapter serves the discriminator
        """
        kind = provider if isinstance(provider, ProviderKind) else ProviderKind.parse(provider)
        if kind is None or kind not in self._generators:
            raise UnsupportedProviderError(
                provider.value if isinstance(provider, ProviderKind) else provider
            )
        return self._generators[kind]

    def kinds(self) -> list[ProviderKind]:
        """Get the registered provider kinds."""
        return list(self._generators)


def create_provider_registry() -> ProviderRegistry:
    """Build the registry with the real vendor SDK adapters."""
    registry = ProviderRegistry({
        ProviderKind.GEMINI: GeminiTextGenerator(),
        ProviderKind.OPENAI: OpenAITextGenerator(),
        ProviderKind.ANTHROPIC: AnthropicTextGenerator(),
    })
    logger.info(
        "Text generation providers: %s",
        ", ".join(kind.value for kind in registry.kinds()),
    )
    return registry


__all__ = [
    "GenerationRequest",
    "ProviderKind",
    "ProviderRegistry",
    "TextGenerator",
    "create_provider_registry",
]
