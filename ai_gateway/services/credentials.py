"""
Tenant credential services.

This module provides:
- CredentialResolver: tenant id -> usable TenantAICredential (read-only)
- CredentialService: masked read and upsert of a tenant's AI settings

Usage:
    resolver = CredentialResolver(store)
    credential = await resolver.resolve("tenant-123")
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from ai_gateway.config import get_logger
from ai_gateway.exceptions import (
    GatewayException,
    InvalidRequestError,
    NoCredentialConfiguredError,
    SettingsStoreError,
    UnsupportedProviderError,
)
from ai_gateway.providers.llm import ProviderKind
from ai_gateway.providers.settings_store import AISettingsRecord, SettingsStoreInterface
from ai_gateway.utils import MASKED_API_KEY, is_masked_or_empty, key_hint

logger = get_logger("services.credentials")


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class TenantAICredential:
    """
    A tenant's complete AI credential.

    ``provider`` is the stored discriminator as-is; it is matched against
    the adapter registry at dispatch time. Provider/model consistency is
    not checked here.
    """
    tenant_id: str
    provider: str
    api_key: str
    model: str

    def __repr__(self) -> str:
        return (
            f"TenantAICredential(tenant_id={self.tenant_id!r}, provider={self.provider!r}, "
            f"model={self.model!r}, api_key={key_hint(self.api_key)!r})"
        )


# =============================================================================
# Credential Resolver
# =============================================================================

class CredentialResolver:
    """Resolves a tenant id to its stored, complete AI credential."""

    def __init__(self, store: SettingsStoreInterface):
        self._store = store

    async def resolve(self, tenant_id: str | None) -> TenantAICredential:
        """
        Look up exactly one settings record for the tenant.

        Raises:
            InvalidRequestError: If tenant_id is empty
            NoCredentialConfiguredError: If the record is missing, the lookup
                fails, or the record lacks provider, key or model
        """
        if tenant_id is None or not tenant_id.strip():
            raise InvalidRequestError("userId is required")

        try:
            record = await self._store.get_ai_settings(tenant_id)
        except Exception as e:
            logger.warning("Credential lookup failed | tenant=%s | error=%s", tenant_id, e)
            raise NoCredentialConfiguredError(details=str(e)) from e

        if record is None:
            logger.info("No AI settings stored | tenant=%s", tenant_id)
            raise NoCredentialConfiguredError()

        missing = [
            name
            for name, value in (
                ("ai_provider", record.ai_provider),
                ("ai_api_key", record.ai_api_key),
                ("model", record.model),
            )
            if not isinstance(value, str) or not value.strip()
        ]
        if missing:
            logger.warning(
                "Unusable AI settings | tenant=%s | missing=%s",
                tenant_id,
                ",".join(missing),
            )
            raise NoCredentialConfiguredError(details=f"Missing fields: {', '.join(missing)}")

        return TenantAICredential(
            tenant_id=tenant_id,
            provider=record.ai_provider,
            api_key=record.ai_api_key,
            model=record.model,
        )


# =============================================================================
# Credential Management
# =============================================================================

class CredentialService:
    """Masked read and save of a tenant's AI settings for the settings page."""

    def __init__(self, store: SettingsStoreInterface):
        self._store = store

    async def get_masked(self, user_id: str | None) -> dict[str, Any]:
        """
        Get the tenant's credential keyed by provider, with the key masked.

        Returns:
            {} when nothing is stored, else
            {provider: {provider, model, status, apiKey: "********"}}
        """
        if user_id is None or not user_id.strip():
            raise InvalidRequestError("userId is required")

        try:
            record = await self._store.get_ai_settings(user_id)
        except GatewayException as e:
            logger.error("Credential fetch failed | user=%s | error=%s", user_id, e.message)
            raise SettingsStoreError("Failed to fetch credentials") from e

        if record is None or not isinstance(record.ai_provider, str) or not record.ai_provider:
            return {}

        return {
            record.ai_provider: {
                "provider": record.ai_provider,
                "model": record.model,
                "status": "connected",
                "apiKey": MASKED_API_KEY,
            }
        }

    async def stored_api_key(self, user_id: str) -> str | None:
        """Get the tenant's stored key, or None when nothing is stored."""
        record = await self._store.get_ai_settings(user_id)
        if record is None or not record.ai_api_key:
            return None
        return record.ai_api_key

    async def save(
        self,
        user_id: str | None,
        provider: str | None,
        api_key: str | None,
        model: str | None,
    ) -> None:
        """
        Upsert the tenant's AI settings.

        A masked or empty api_key keeps the key already stored.

        Raises:
            InvalidRequestError: Missing fields, or no key to keep
            UnsupportedProviderError: Unknown provider
            SettingsStoreError: Store read/write failure
        """
        if not user_id or not provider or not model:
            raise InvalidRequestError("Missing required fields")

        kind = ProviderKind.parse(provider)
        if kind is None:
            raise UnsupportedProviderError(provider)

        final_key = api_key
        if is_masked_or_empty(api_key):
            try:
                final_key = await self.stored_api_key(user_id)
            except GatewayException as e:
                raise SettingsStoreError("Failed to save credential") from e
            if final_key is None:
                raise InvalidRequestError("API key is required")

        record = AISettingsRecord(
            user_id=user_id,
            ai_provider=kind.value,
            ai_api_key=final_key,
            model=model,
            updated_at=datetime.now(timezone.utc),
        )
        try:
            await self._store.upsert_ai_settings(record)
        except GatewayException as e:
            logger.error("Credential save failed | user=%s | error=%s", user_id, e.message)
            raise SettingsStoreError("Failed to save credential") from e

        logger.info(
            "Credential saved | user=%s | provider=%s | model=%s | key=%s",
            user_id,
            kind.value,
            model,
            key_hint(final_key),
        )
