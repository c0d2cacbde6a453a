"""
Centralized configuration using Pydantic BaseSettings.

Configuration Philosophy:
    - .env: Only sensitive data (store credentials)
    - config.py: All application settings with sensible defaults

Tenant AI keys are NOT configuration: each tenant stores their own key in
the tenant settings store and it is resolved per request.

Usage:
    from ai_gateway.config import settings, get_logger

    print(settings.HOST)  # Type-safe access
"""
from __future__ import annotations

import logging
import re
from functools import cached_property, lru_cache
from typing import ClassVar, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Configuration Sources:
        1. Environment variables
        2. .env file (if present)
        3. Default values (defined below)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # Server Configuration
    # =========================================================================

    HOST: str = Field(
        default="0.0.0.0",
        description="Server host (0.0.0.0 for external access, 127.0.0.1 for local only)",
    )
    PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Server port number",
    )
    DEBUG: bool = Field(
        default=False,
        description="Debug mode - enables auto-reload (NEVER use in production)",
    )
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )

    # =========================================================================
    # Tenant Settings Store
    # =========================================================================
    # Sensitive: Firebase credentials loaded from .env

    SETTINGS_STORE_PROVIDER: Literal["firestore", "memory"] = Field(
        default="firestore",
        description="Backend holding per-tenant AI settings ('memory' is for local development)",
    )
    FIREBASE_CREDS_BASE64: str | None = Field(
        default=None,
        description="Base64-encoded Firebase service account JSON (alternative to GOOGLE_APPLICATION_CREDENTIALS)",
    )
    FIRESTORE_SETTINGS_COLLECTION: str = Field(
        default="user_settings",
        description="Firestore collection holding one AI settings document per tenant",
    )
    FIRESTORE_QUERY_TIMEOUT_SECONDS: float = Field(
        default=8.0,
        gt=0,
        description="Maximum time to wait for a settings document read or write",
    )

    # =========================================================================
    # Generation
    # =========================================================================

    MAX_PROMPT_LENGTH: int = Field(
        default=100_000,
        ge=1,
        description="Maximum prompt length in characters",
    )

    # =========================================================================
    # CORS Configuration
    # =========================================================================

    CORS_ORIGINS: str = Field(
        default="*",
        description="Comma-separated allowed origins ('*' for all, restrict in production)",
    )

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str) -> str:
        """Ensure LOG_LEVEL is uppercase."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("SETTINGS_STORE_PROVIDER", mode="before")
    @classmethod
    def lowercase_provider(cls, v: str) -> str:
        """Ensure provider names are lowercase."""
        return v.lower() if isinstance(v, str) else v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @cached_property
    def CORS_ORIGINS_LIST(self) -> list[str]:
        """Get list of CORS origins."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# =============================================================================
# Settings Factory with Caching
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache for singleton behavior while allowing
    cache invalidation in tests.
    """
    return Settings()


# Convenience alias for direct access
settings = get_settings()


# =============================================================================
# Logging Configuration
# =============================================================================

class SanitizingFormatter(logging.Formatter):
    """
    Logging formatter that redacts sensitive information.

    Automatically redacts:
    - Bearer tokens
    - API keys (including vendor key prefixes like sk-...)
    - Tokens
    - Passwords
    """

    SENSITIVE_PATTERNS: ClassVar[list[tuple[re.Pattern[str], str]]] = [
        (re.compile(r'(Bearer\s+)[^\s]+', re.I), r'\1[REDACTED]'),
        (re.compile(r'(api[_-]?key["\']?\s*[:=]\s*["\']?)[^"\'\s]+', re.I), r'\1[REDACTED]'),
        (re.compile(r'(token["\']?\s*[:=]\s*["\']?)[^"\'\s]+', re.I), r'\1[REDACTED]'),
        (re.compile(r'(password["\']?\s*[:=]\s*["\']?)[^"\'\s]+', re.I), r'\1[REDACTED]'),
        (re.compile(r'\bsk-[A-Za-z0-9_\-]{8,}'), '[REDACTED]'),
        (re.compile(r'\bAIza[0-9A-Za-z_\-]{20,}'), '[REDACTED]'),
    ]

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with sensitive data redaction."""
        message = super().format(record)
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            message = pattern.sub(replacement, message)
        return message


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    handler = logging.StreamHandler()
    handler.setFormatter(SanitizingFormatter(log_format))

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        handlers=[handler],
        force=True,  # Override any existing configuration
    )

    # Suppress noisy third-party loggers
    for logger_name in ("httpx", "httpcore", "google", "openai", "anthropic", "urllib3", "grpc"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        Configured logging.Logger instance
    """
    return logging.getLogger(name)


# Initialize logging on module load
configure_logging(settings.LOG_LEVEL)
