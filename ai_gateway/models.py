"""
Pydantic models for request/response validation and OpenAPI documentation.

Wire field names follow the CRM frontend (camelCase); Python attributes are
snake_case through aliases.

Usage:
    from ai_gateway.models import GenerateRequest, GenerateResponse
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Request Models
# =============================================================================

class GatewayRequest(BaseModel):
    """
    Base for request bodies.

    Every field is optional at the schema level so that missing inputs are
    reported by the services with the exact messages the frontend expects,
    instead of as generic schema errors.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )


class GenerateRequest(GatewayRequest):
    """
    Text generation request.

    Example:
        >>> GenerateRequest(userId="tenant-1", prompt="Summarize this lead")
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "userId": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
                    "prompt": "Write a short follow-up email for a lead that went quiet.",
                    "systemInstruction": "You are a concise B2B sales assistant.",
                }
            ]
        }
    )

    user_id: str | None = Field(
        default=None,
        alias="userId",
        description="Tenant identifier whose AI settings are used",
    )
    prompt: str | None = Field(
        default=None,
        description="User prompt (required, non-empty)",
    )
    system_instruction: str | None = Field(
        default=None,
        alias="systemInstruction",
        description="Optional system instruction",
    )


class TestConnectionRequest(GatewayRequest):
    """
    Connection test request.

    ``apiKey`` may be omitted or masked ("********") to test the key
    already stored for ``userId``.
    """

    __test__ = False  # not a pytest test class

    provider: str | None = Field(
        default=None,
        description="Provider discriminator (gemini, openai, anthropic)",
        examples=["openai"],
    )
    model: str | None = Field(
        default=None,
        description="Provider model identifier",
        examples=["gpt-5-mini"],
    )
    api_key: str | None = Field(
        default=None,
        alias="apiKey",
        description="API key to test",
    )
    user_id: str | None = Field(
        default=None,
        alias="userId",
        description="Tenant whose stored key to test when apiKey is absent or masked",
    )


class SaveCredentialRequest(GatewayRequest):
    """Credential save (upsert) request."""

    user_id: str | None = Field(default=None, alias="userId")
    provider: str | None = Field(default=None)
    api_key: str | None = Field(
        default=None,
        alias="apiKey",
        description="New key, or empty / '********' to keep the stored key",
    )
    model: str | None = Field(default=None)


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """
    Standard error response format.

    All API errors except connection tests return this shape.
    """

    model_config = ConfigDict(frozen=True)

    error: str = Field(
        ...,
        description="Error message",
        examples=["userId is required", "Nenhuma credencial configurada."],
    )


class GenerateResponse(BaseModel):
    """Generated text (may be empty)."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Generated text")


class TestConnectionResponse(BaseModel):
    """Connection test outcome."""

    __test__ = False  # not a pytest test class

    model_config = ConfigDict(frozen=True)

    success: bool = Field(..., description="Whether the provider accepted the credential")
    message: str = Field(..., description="Human-readable outcome")


class StoredCredential(BaseModel):
    """A stored credential as shown to the tenant (key always masked)."""

    model_config = ConfigDict(populate_by_name=True)

    provider: str
    model: str | None = None
    status: str = Field(default="connected")
    api_key: str = Field(..., alias="apiKey")


class SaveCredentialResponse(BaseModel):
    """Credential save acknowledgement."""

    success: bool = Field(default=True)


class ModelInfoResponse(BaseModel):
    """One catalog model."""

    id: str
    provider: str
    name: str
    recommended: bool = False


class ModelsResponse(BaseModel):
    """Catalog listing."""

    models: list[ModelInfoResponse] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str = Field(default="ok", examples=["ok"])
    time: datetime = Field(..., description="Server time (UTC)")


class ReadinessResponse(BaseModel):
    """Readiness probe response for container orchestration."""

    model_config = ConfigDict(frozen=True)

    ready: bool = Field(..., description="Whether the service is ready to accept requests")
    checks: dict[str, bool] = Field(default_factory=dict)
