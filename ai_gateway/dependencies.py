"""
FastAPI dependencies for dependency injection.

Usage:
    from ai_gateway.dependencies import get_app_state

    @router.post("/endpoint")
    async def endpoint(state: AppState = Depends(get_app_state)):
        ...
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

from ai_gateway.config import get_logger

if TYPE_CHECKING:
    from ai_gateway.state import AppState

logger = get_logger("dependencies")


async def get_app_state(request: Request) -> "AppState":
    """
    FastAPI dependency to get application state.

    Raises:
        RuntimeError: If application state is not initialized
    """
    if not hasattr(request.app.state, "app_state"):
        logger.error("Application state not initialized")
        raise RuntimeError("Application state not initialized")
    return request.app.state.app_state
