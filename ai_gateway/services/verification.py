"""
Connection verification service.

Runs a provider's minimal probe against a caller-supplied
provider/model/key triple. No tenant lookup and no state changes.
"""
from __future__ import annotations

import time
from dataclasses import dataclass

from ai_gateway.config import get_logger
from ai_gateway.exceptions import UnsupportedProviderError
from ai_gateway.providers.llm import ProviderRegistry
from ai_gateway.utils import elapsed_ms, key_hint

logger = get_logger("services.verification")

SUCCESS_MESSAGE = "Conexão estabelecida com sucesso!"
FALLBACK_FAILURE_MESSAGE = "Falha na conexão"
EMPTY_KEY_MESSAGE = "API Key is empty"


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    message: str

    def to_dict(self) -> dict:
        return {"success": self.success, "message": self.message}


class ConnectionVerifier:
    """Checks that a credential authenticates against its provider."""

    def __init__(self, registry: ProviderRegistry):
        self._registry = registry

    async def verify(
        self,
        provider: str | None,
        model: str | None,
        api_key: str | None,
    ) -> VerificationResult:
        """
        Probe the provider with the given key.

        Never raises: every failure becomes ``success=False`` carrying the
        failure's message, or a fixed fallback when it has none.
        """
        start = time.perf_counter()

        try:
            generator = self._registry.get(provider)
        except UnsupportedProviderError as e:
            return self._failure(e.message, provider, model, api_key, start)

        if api_key is None or not api_key.strip():
            return self._failure(EMPTY_KEY_MESSAGE, provider, model, api_key, start)

        try:
            await generator.probe(model or "", api_key)
        except Exception as e:
            logger.debug("Probe raised %s", type(e).__name__)
            return self._failure(str(e), provider, model, api_key, start)

        logger.info(
            "Connection test passed | provider=%s | model=%s | key=%s | elapsed_ms=%.1f",
            provider,
            model,
            key_hint(api_key),
            elapsed_ms(start),
        )
        return VerificationResult(success=True, message=SUCCESS_MESSAGE)

    @staticmethod
    def _failure(
        message: str,
        provider: str | None,
        model: str | None,
        api_key: str | None,
        start: float,
    ) -> VerificationResult:
        logger.info(
            "Connection test failed | provider=%s | model=%s | key=%s | elapsed_ms=%.1f | reason=%s",
            provider,
            model,
            key_hint(api_key),
            elapsed_ms(start),
            message,
        )
        return VerificationResult(success=False, message=message or FALLBACK_FAILURE_MESSAGE)
