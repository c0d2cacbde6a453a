"""
Custom exceptions for the AI gateway.

This module provides a consistent exception hierarchy for error handling
across the settings store, provider adapters, and services.

Exception Hierarchy:
    GatewayException (base)
    ├── ConfigurationError (500)
    ├── InvalidRequestError (400)
    ├── NoCredentialConfiguredError (400)
    ├── UnsupportedProviderError (400)
    ├── MethodNotAllowedError (405)
    ├── ProviderInvocationError (500)
    └── SettingsStoreError (500)

Usage:
    from ai_gateway.exceptions import ProviderInvocationError

    raise ProviderInvocationError("Incorrect API key provided")
"""
from __future__ import annotations

from typing import Any


class GatewayException(Exception):
    """
    Base exception for all gateway errors.

    All custom exceptions inherit from this class, enabling
    consistent error handling at the API layer.

    Attributes:
        message: Human-readable error message (sent to the caller as-is)
        status_code: HTTP status code for API response
        details: Additional error details (optional, logged only)
        error_code: Machine-readable error code (optional)
    """

    default_message: str = "An error occurred"
    default_status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        details: str | None = None,
        error_code: str | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.status_code = status_code or self.default_status_code
        self.details = details
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to the wire error body.

        Returns:
            Dictionary with the single ``error`` key the CRM frontend reads
        """
        return {"error": self.message}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, status_code={self.status_code})"


# =============================================================================
# Configuration Errors (500)
# =============================================================================

class ConfigurationError(GatewayException):
    """
    Raised when the service itself is misconfigured.

    Examples:
        - Unknown settings store backend
        - Unreadable Firebase credentials
    """

    default_message = "Configuration error"
    default_status_code = 500


# =============================================================================
# Client Errors (4xx)
# =============================================================================

class InvalidRequestError(GatewayException):
    """
    Raised when a required input field is missing or malformed.

    Examples:
        - Missing userId
        - Empty prompt
    """

    default_message = "Invalid request"
    default_status_code = 400


class NoCredentialConfiguredError(GatewayException):
    """
    Raised when a tenant has no usable AI settings.

    Covers a missing settings record, a failed lookup, and a record
    lacking provider, key or model. The caller is expected to prompt
    the tenant for configuration.
    """

    default_message = "Nenhuma credencial configurada."
    default_status_code = 400


class UnsupportedProviderError(GatewayException):
    """Raised when a provider discriminator matches no adapter."""

    default_message = "Unsupported provider"
    default_status_code = 400

    def __init__(self, provider: str | None = None, **kwargs: Any) -> None:
        self.provider = provider
        message = kwargs.pop("message", None) or (
            f"Unsupported provider: {provider}" if provider else None
        )
        super().__init__(message, **kwargs)


class MethodNotAllowedError(GatewayException):
    """Raised when an endpoint is called with the wrong HTTP verb."""

    default_message = "Method not allowed"
    default_status_code = 405


# =============================================================================
# Server Errors (500)
# =============================================================================

class ProviderInvocationError(GatewayException):
    """
    Raised when a vendor backend call fails.

    Bad key, bad model, quota and transport failures are not distinguished;
    the vendor's message is carried verbatim.
    """

    default_message = "Provider invocation failed"
    default_status_code = 500


class SettingsStoreError(GatewayException):
    """
    Raised when the tenant settings store fails.

    Examples:
        - Connection failure
        - Query timeout
        - Permission denied
    """

    default_message = "Settings store error"
    default_status_code = 500
