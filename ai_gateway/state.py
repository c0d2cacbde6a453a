"""
Application state management.

``AppState`` wires the settings store and the provider registry into the
services once at startup. Tests build it directly with fakes.
"""
from __future__ import annotations

from dataclasses import dataclass

from ai_gateway.config import get_logger
from ai_gateway.providers.llm import ProviderRegistry, create_provider_registry
from ai_gateway.providers.settings_store import SettingsStoreInterface, create_settings_store
from ai_gateway.services.credentials import CredentialResolver, CredentialService
from ai_gateway.services.generation import GenerationGateway
from ai_gateway.services.verification import ConnectionVerifier

logger = get_logger("state")


@dataclass
class AppState:
    """Central container for shared application resources."""
    settings_store: SettingsStoreInterface
    provider_registry: ProviderRegistry
    credential_resolver: CredentialResolver
    credential_service: CredentialService
    generation_gateway: GenerationGateway
    connection_verifier: ConnectionVerifier

    @classmethod
    def build(
        cls,
        settings_store: SettingsStoreInterface,
        provider_registry: ProviderRegistry,
    ) -> "AppState":
        """Wire services around an already constructed store and registry."""
        resolver = CredentialResolver(settings_store)
        return cls(
            settings_store=settings_store,
            provider_registry=provider_registry,
            credential_resolver=resolver,
            credential_service=CredentialService(settings_store),
            generation_gateway=GenerationGateway(resolver, provider_registry),
            connection_verifier=ConnectionVerifier(provider_registry),
        )

    @classmethod
    async def create(cls) -> "AppState":
        """
        Create and initialize application state from configuration.

        Raises:
            RuntimeError: If the settings store fails to initialize.
        """
        store = create_settings_store()
        if not await store.initialize():
            logger.critical("Settings store failed to initialize. Aborting startup.")
            raise RuntimeError("Critical Dependency Failed: settings store could not be initialized.")

        state = cls.build(store, create_provider_registry())
        logger.info(
            "Providers: SettingsStore=%s (%s) | AI=%s",
            store.get_provider_name(),
            "OK" if store.is_available() else "UNAVAILABLE",
            ", ".join(kind.value for kind in state.provider_registry.kinds()),
        )
        return state

    def is_ready(self) -> bool:
        """Check if the application is ready to handle requests."""
        return self.settings_store.is_available()
