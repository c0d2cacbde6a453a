"""
Abstract interface for tenant settings stores.

All settings stores must implement this interface to ensure
consistent behavior and easy hot-swapping.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class AISettingsRecord:
    """
    One tenant's stored AI settings row.

    Fields are optional because stored rows may be incomplete; the
    credential resolver decides whether a row is usable.
    """
    user_id: str
    ai_provider: Optional[str] = None
    ai_api_key: Optional[str] = None
    model: Optional[str] = None
    updated_at: Optional[datetime] = None

    def __repr__(self) -> str:
        return (
            f"AISettingsRecord(user_id={self.user_id!r}, ai_provider={self.ai_provider!r}, "
            f"model={self.model!r}, has_key={bool(self.ai_api_key)})"
        )


class SettingsStoreInterface(ABC):
    """
    Abstract interface for tenant AI settings storage.

    All implementations must provide:
    - Single-row fetch keyed by tenant id
    - Upsert of a tenant's row
    - Connection management
    - Provider information
    """

    @abstractmethod
    async def initialize(self) -> bool:
        """
        Initialize the store connection.

        Returns:
            True if initialization succeeded, False otherwise
        """
        pass

    @abstractmethod
    async def get_ai_settings(self, user_id: str) -> AISettingsRecord | None:
        """
        Fetch a tenant's AI settings.

        Returns:
            The stored record, or None when the tenant has no row

        Raises:
            SettingsStoreError: If the lookup itself fails
        """
        pass

    @abstractmethod
    async def upsert_ai_settings(self, record: AISettingsRecord) -> None:
        """
        Create or replace a tenant's AI settings.

        Raises:
            SettingsStoreError: If the write fails
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the provider name (e.g., 'firestore', 'memory')."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the store connection is available."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the store connection."""
        pass
