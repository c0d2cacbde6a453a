"""
In-memory settings store.

Holds tenant rows in a process-local dict. Meant for local development
and tests; nothing survives a restart.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from ...config import get_logger
from .interface import AISettingsRecord, SettingsStoreInterface

logger = get_logger("settings_store.memory")


class InMemorySettingsStore(SettingsStoreInterface):
    """Dict-backed tenant settings store."""

    def __init__(self, records: dict[str, AISettingsRecord] | None = None):
        self._records: dict[str, AISettingsRecord] = dict(records or {})
        self._initialized = False

    async def initialize(self) -> bool:
        self._initialized = True
        logger.warning("Using in-memory settings store; tenant settings are not persisted")
        return True

    async def get_ai_settings(self, user_id: str) -> AISettingsRecord | None:
        record = self._records.get(user_id)
        # Hand out copies so callers cannot mutate stored rows
        return replace(record) if record is not None else None

    async def upsert_ai_settings(self, record: AISettingsRecord) -> None:
        stored = replace(record, updated_at=record.updated_at or datetime.now(timezone.utc))
        self._records[record.user_id] = stored

    def get_provider_name(self) -> str:
        return "memory"

    def is_available(self) -> bool:
        return self._initialized

    async def close(self) -> None:
        self._initialized = False
