"""
AI endpoints used by the CRM frontend.

This module provides:
- POST /api/ai/generate         - tenant text generation
- POST /api/ai/test-connection  - "test before save" credential check
- GET  /api/ai/credentials      - tenant credential, key masked
- POST /api/ai/credentials      - save (upsert) tenant credential
- GET  /api/ai/models           - catalog of offered models

Any other method on these paths is answered with 405 by the exception
handlers in main.py, before the handler or body parsing runs.

Usage:
    POST /api/ai/generate
    {
        "userId": "tenant-123",
        "prompt": "Write a follow-up email",
        "systemInstruction": "Be concise."
    }
"""
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse

from ai_gateway.config import get_logger
from ai_gateway.dependencies import get_app_state
from ai_gateway.exceptions import GatewayException, UnsupportedProviderError
from ai_gateway.models import (
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    ModelInfoResponse,
    ModelsResponse,
    SaveCredentialRequest,
    SaveCredentialResponse,
    StoredCredential,
    TestConnectionRequest,
    TestConnectionResponse,
)
from ai_gateway.providers.llm import ProviderKind
from ai_gateway.providers.llm.catalog import list_models
from ai_gateway.state import AppState
from ai_gateway.utils import is_masked_or_empty

logger = get_logger("routes.ai")

router = APIRouter(prefix="/api/ai", tags=["AI"])

USER_ID_REQUIRED_FOR_STORED_KEY = "userId necessário para testar chave armazenada."
NO_STORED_KEY = "Nenhuma chave armazenada para este provedor."

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request or no credential configured"},
    405: {"model": ErrorResponse, "description": "Method not allowed"},
    500: {"model": ErrorResponse, "description": "Provider or server failure"},
}


# =============================================================================
# Generation
# =============================================================================

@router.post(
    "/generate",
    response_model=GenerateResponse,
    summary="Generate text with the tenant's AI provider",
    responses=ERROR_RESPONSES,
)
async def generate(
    payload: GenerateRequest | None = Body(default=None),
    state: AppState = Depends(get_app_state),
) -> GenerateResponse:
    """
    Generate text using the provider, model and key the tenant configured.

    **Request Body:**
    - `userId`: tenant identifier (required)
    - `prompt`: prompt text (required)
    - `systemInstruction`: optional system instruction

    **Responses:**
    - 200 `{text}` (text may be empty)
    - 400 `{error: "userId is required"}`
    - 400 `{error: "Nenhuma credencial configurada."}`
    - 500 `{error: <provider message>}`
    """
    payload = payload or GenerateRequest()
    result = await state.generation_gateway.generate(
        payload.user_id,
        payload.prompt,
        payload.system_instruction,
    )
    return GenerateResponse(text=result.text)


# =============================================================================
# Connection Test
# =============================================================================

@router.post(
    "/test-connection",
    response_model=TestConnectionResponse,
    summary="Test an AI provider credential",
    responses={
        400: {"model": TestConnectionResponse, "description": "Credential rejected"},
        405: {"model": ErrorResponse, "description": "Method not allowed"},
    },
)
async def test_connection(
    payload: TestConnectionRequest | None = Body(default=None),
    state: AppState = Depends(get_app_state),
) -> JSONResponse:
    """
    Run a minimal call against the provider with the given credential.

    When `apiKey` is absent or masked, the key stored for `userId` is used.
    Nothing is saved.
    """
    payload = payload or TestConnectionRequest()
    api_key = payload.api_key

    if is_masked_or_empty(api_key):
        if not payload.user_id:
            return _connection_response(False, USER_ID_REQUIRED_FOR_STORED_KEY)
        try:
            api_key = await state.credential_service.stored_api_key(payload.user_id)
        except GatewayException as e:
            logger.warning(
                "Stored key lookup failed | user=%s | error=%s", payload.user_id, e.message
            )
            api_key = None
        if api_key is None:
            return _connection_response(False, NO_STORED_KEY)

    result = await state.connection_verifier.verify(payload.provider, payload.model, api_key)
    return _connection_response(result.success, result.message)


def _connection_response(success: bool, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_200_OK if success else status.HTTP_400_BAD_REQUEST,
        content=TestConnectionResponse(success=success, message=message).model_dump(),
    )


# =============================================================================
# Credentials
# =============================================================================

@router.get(
    "/credentials",
    response_model=dict[str, StoredCredential],
    summary="Get the tenant's stored credential (key masked)",
    responses=ERROR_RESPONSES,
)
async def get_credentials(
    user_id: str | None = Query(default=None, alias="userId"),
    state: AppState = Depends(get_app_state),
) -> dict:
    """
    Returns `{}` when nothing is stored, otherwise the credential keyed by
    provider with `apiKey` always `"********"`.
    """
    return await state.credential_service.get_masked(user_id)


@router.post(
    "/credentials",
    response_model=SaveCredentialResponse,
    summary="Save the tenant's credential",
    responses=ERROR_RESPONSES,
)
async def save_credentials(
    payload: SaveCredentialRequest | None = Body(default=None),
    state: AppState = Depends(get_app_state),
) -> SaveCredentialResponse:
    """
    Upsert the tenant's provider, model and key.

    An empty or masked `apiKey` keeps the key already stored.
    """
    payload = payload or SaveCredentialRequest()
    await state.credential_service.save(
        payload.user_id,
        payload.provider,
        payload.api_key,
        payload.model,
    )
    return SaveCredentialResponse(success=True)


# =============================================================================
# Model Catalog
# =============================================================================

@router.get(
    "/models",
    response_model=ModelsResponse,
    summary="List offered models",
    responses={400: {"model": ErrorResponse, "description": "Unknown provider"}},
)
async def get_models(
    provider: str | None = Query(default=None, description="Only list this provider's models"),
) -> ModelsResponse:
    """List the models the CRM offers, optionally for one provider."""
    kind = None
    if provider is not None:
        kind = ProviderKind.parse(provider)
        if kind is None:
            raise UnsupportedProviderError(provider)

    return ModelsResponse(
        models=[ModelInfoResponse(**model.to_dict()) for model in list_models(kind)]
    )
