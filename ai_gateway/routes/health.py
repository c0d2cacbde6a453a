"""
Health check endpoints.

Usage:
    GET /api/health  - Liveness probe
    GET /api/ready   - Readiness probe (settings store reachable)
"""
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ai_gateway.config import get_logger
from ai_gateway.dependencies import get_app_state
from ai_gateway.models import HealthResponse, ReadinessResponse
from ai_gateway.state import AppState

logger = get_logger("routes.health")

router = APIRouter(prefix="/api", tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def health() -> HealthResponse:
    """Always 200 while the process is serving; checks no dependency."""
    return HealthResponse(status="ok", time=datetime.now(timezone.utc))


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    responses={503: {"model": ReadinessResponse, "description": "Service is not ready"}},
)
async def readiness_check(
    state: AppState = Depends(get_app_state),
) -> ReadinessResponse | JSONResponse:
    """
    Returns 200 if the settings store is available, 503 otherwise.

    AI providers are per-tenant and have no process-level readiness.
    """
    checks = {"settings_store": state.settings_store.is_available()}
    response = ReadinessResponse(ready=state.is_ready(), checks=checks)

    if not response.ready:
        logger.warning("Readiness check failed: settings_store=%s", checks["settings_store"])
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )
    return response
