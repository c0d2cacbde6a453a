"""
Settings Store Provider - Factory module for tenant settings storage.

Selects the appropriate store implementation based on configuration.
The store is built by the application lifespan and injected into the
services; nothing here is a module-level instance.
"""
from __future__ import annotations

from ai_gateway.config import get_logger, settings
from ai_gateway.exceptions import ConfigurationError

from .interface import AISettingsRecord, SettingsStoreInterface

logger = get_logger("settings_store.provider")


def create_settings_store(provider: str | None = None) -> SettingsStoreInterface:
    """
    Build the configured settings store.

    Args:
        provider: Override for settings.SETTINGS_STORE_PROVIDER

    Raises:
        ConfigurationError: If the provider name is unknown
    """
    provider = provider or settings.SETTINGS_STORE_PROVIDER

    if provider == "firestore":
        from .firestore_impl import FirestoreSettingsStore
        logger.info(
            "Settings Store: Firestore (collection: %s)",
            settings.FIRESTORE_SETTINGS_COLLECTION,
        )
        return FirestoreSettingsStore()
    if provider == "memory":
        from .memory_impl import InMemorySettingsStore
        logger.info("Settings Store: in-memory")
        return InMemorySettingsStore()

    raise ConfigurationError(
        f"Unknown settings store provider: {provider}. Supported: firestore, memory"
    )


__all__ = ["AISettingsRecord", "SettingsStoreInterface", "create_settings_store"]
