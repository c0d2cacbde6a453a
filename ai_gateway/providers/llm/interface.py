"""
Abstract interface for text generation providers.

Every supported vendor implements ``TextGenerator`` so the gateway can
dispatch on a ``ProviderKind`` without knowing any vendor request shape.
"""
from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

# Builds a vendor SDK client from a tenant API key
ClientFactory = Callable[[str], Any]


class ProviderKind(str, Enum):
    """Closed set of supported AI vendors."""
    GEMINI = "gemini"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"

    @classmethod
    def parse(cls, value: str | None) -> "ProviderKind | None":
        """
        Parse a stored or submitted provider discriminator.

        Accepts the legacy ``google`` alias for Gemini. Returns None for
        anything unrecognized so callers decide how to fail.
        """
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        if normalized == "google":
            normalized = cls.GEMINI.value
        try:
            return cls(normalized)
        except ValueError:
            return None


@dataclass(frozen=True)
class GenerationRequest:
    """Canonical, vendor-independent generation request."""
    prompt: str
    model: str
    api_key: str
    system_instruction: Optional[str] = None

    def __repr__(self) -> str:
        # Keep the tenant key out of reprs and tracebacks
        return (
            f"GenerationRequest(model={self.model!r}, prompt_len={len(self.prompt)}, "
            f"has_system_instruction={self.system_instruction is not None})"
        )


class TextGenerator(ABC):
    """
    Abstract interface for vendor text generation adapters.

    All implementations must provide:
    - ``invoke``: translate a canonical request into one vendor call and
      return plain text ("" when the vendor returned no text)
    - ``probe``: the cheapest call that still proves the key authenticates
    - Provider information

    Vendor exceptions propagate unchanged; adapters never retry.
    """

    def __init__(self, client_factory: ClientFactory | None = None):
        self._client_factory = client_factory or self._default_client

    @staticmethod
    @abstractmethod
    def _default_client(api_key: str) -> Any:
        """Build the vendor SDK client for one call."""
        pass

    def _get_client(self, api_key: str) -> Any:
        """Get a fresh client bound to the tenant key."""
        return self._client_factory(api_key)

    @abstractmethod
    async def invoke(self, request: GenerationRequest) -> str:
        """
        Generate text for a canonical request.

        Args:
            request: Prompt, optional system instruction, model and key

        Returns:
            str: Generated text, possibly empty, never None
        """
        pass

    @abstractmethod
    async def probe(self, model: str, api_key: str) -> None:
        """
        Issue a minimal authenticated call.

        Raises:
            Exception: Whatever the vendor raises when it rejects the call
        """
        pass

    @abstractmethod
    def get_provider_kind(self) -> ProviderKind:
        """Get the provider this adapter serves."""
        pass

    def get_provider_name(self) -> str:
        """Get the provider name (e.g., 'openai', 'gemini')."""
        return self.get_provider_kind().value


async def close_client(client: Any) -> None:
    """Close an SDK client if it exposes ``close()`` (sync or async)."""
    close = getattr(client, "close", None)
    if close is None:
        return
    result = close()
    if inspect.isawaitable(result):
        await result
