"""
Firestore settings store implementation.

Storage Structure:
- Collection: settings.FIRESTORE_SETTINGS_COLLECTION (default "user_settings")
- Document ID: {user_id}
- Fields: ai_provider, ai_api_key, model, updated_at
"""
from __future__ import annotations

import asyncio
import base64
import inspect
import json
from datetime import datetime, timezone
from typing import Optional

from google.cloud import firestore
from google.oauth2 import service_account

from ...config import get_logger, settings
from ...exceptions import SettingsStoreError
from .interface import AISettingsRecord, SettingsStoreInterface

logger = get_logger("settings_store.firestore")


class FirestoreSettingsStore(SettingsStoreInterface):
    """
    Firestore-backed tenant settings store.

    Every read and write is attempted once, bounded by
    FIRESTORE_QUERY_TIMEOUT_SECONDS, and failures surface as
    SettingsStoreError.
    """

    def __init__(self, collection: str | None = None):
        self._client: Optional[firestore.AsyncClient] = None
        self._initialized = False
        self._credentials = None
        self._collection = collection or settings.FIRESTORE_SETTINGS_COLLECTION

    async def initialize(self) -> bool:
        """Initialize the Firestore AsyncClient."""
        if self._initialized and self._client:
            return True

        try:
            if settings.FIREBASE_CREDS_BASE64:
                # Decode base64 credentials
                padded = settings.FIREBASE_CREDS_BASE64 + "=" * (
                    (4 - len(settings.FIREBASE_CREDS_BASE64) % 4) % 4
                )
                cred_json = base64.b64decode(padded).decode("utf-8")
                info = json.loads(cred_json)
                self._credentials = service_account.Credentials.from_service_account_info(info)
                self._client = firestore.AsyncClient(credentials=self._credentials)
            else:
                # Use default credentials (ADC)
                self._client = firestore.AsyncClient()
        except Exception as e:
            logger.error("Firestore initialization failed: %s", e)
            return False

        self._initialized = True
        logger.info("Firestore AsyncClient initialized | collection=%s", self._collection)
        return True

    def _document(self, user_id: str):
        if not self._client:
            raise SettingsStoreError("Settings store not initialized")
        return self._client.collection(self._collection).document(user_id)

    async def get_ai_settings(self, user_id: str) -> AISettingsRecord | None:
        """Read the tenant's settings document."""
        doc_ref = self._document(user_id)
        try:
            snapshot = await asyncio.wait_for(
                doc_ref.get(),
                timeout=settings.FIRESTORE_QUERY_TIMEOUT_SECONDS,
            )
        except asyncio.TimeoutError as e:
            logger.warning("Settings read timed out | user=%s", user_id)
            raise SettingsStoreError(
                "Settings lookup timed out",
                details=f"Timeout after {settings.FIRESTORE_QUERY_TIMEOUT_SECONDS}s",
            ) from e
        except Exception as e:
            logger.error("Settings read failed | user=%s | error=%s", user_id, e)
            raise SettingsStoreError("Settings lookup failed", details=str(e)) from e

        if not snapshot.exists:
            return None

        data = snapshot.to_dict() or {}
        return AISettingsRecord(
            user_id=user_id,
            ai_provider=data.get("ai_provider"),
            ai_api_key=data.get("ai_api_key"),
            model=data.get("model"),
            updated_at=data.get("updated_at"),
        )

    async def upsert_ai_settings(self, record: AISettingsRecord) -> None:
        """Write the tenant's settings document, merging with existing fields."""
        doc_ref = self._document(record.user_id)
        payload = {
            "user_id": record.user_id,
            "ai_provider": record.ai_provider,
            "ai_api_key": record.ai_api_key,
            "model": record.model,
            "updated_at": record.updated_at or datetime.now(timezone.utc),
        }
        try:
            await asyncio.wait_for(
                doc_ref.set(payload, merge=True),
                timeout=settings.FIRESTORE_QUERY_TIMEOUT_SECONDS,
            )
        except asyncio.TimeoutError as e:
            logger.warning("Settings write timed out | user=%s", record.user_id)
            raise SettingsStoreError("Settings write timed out") from e
        except Exception as e:
            logger.error("Settings write failed | user=%s | error=%s", record.user_id, e)
            raise SettingsStoreError("Settings write failed", details=str(e)) from e

    def get_provider_name(self) -> str:
        """Get the provider name."""
        return "firestore"

    def is_available(self) -> bool:
        """Check if Firestore is available."""
        return self._initialized and self._client is not None

    async def close(self) -> None:
        """Close the Firestore connection."""
        if self._client:
            try:
                result = self._client.close()
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.warning("Error closing Firestore client: %s", e)
            finally:
                self._client = None
                self._initialized = False
                self._credentials = None
                logger.info("Firestore connection closed")
