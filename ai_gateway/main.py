"""
FastAPI application entry point.

This module initializes the FastAPI application with:
- Lifespan management (startup/shutdown)
- Middleware configuration (CORS)
- Exception handlers
- Route registration
- OpenAPI documentation

Architecture:
- Provider registry for per-tenant AI vendors (Gemini, OpenAI, Anthropic)
- Swappable tenant settings store (Firestore, in-memory)
- Centralized configuration via Pydantic Settings

Usage:
    Run with uvicorn:
        uvicorn ai_gateway.main:app --host 0.0.0.0 --port 3000

    Or with the server.py entry point:
        python server.py
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ai_gateway.config import get_logger, settings
from ai_gateway.exceptions import GatewayException, MethodNotAllowedError
from ai_gateway.routes import ai as ai_routes
from ai_gateway.routes import health
from ai_gateway.state import AppState

logger = get_logger("ai_gateway.main")

API_VERSION = "1.0.0"
INVALID_BODY_MESSAGE = "Invalid request body"


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles:
    - Startup: Build and initialize application state (unless injected)
    - Shutdown: Close the settings store connection
    """
    logger.info("=" * 60)
    logger.info("CRM AI Gateway Starting...")
    logger.info("=" * 60)
    logger.info("Configuration | SettingsStore=%s", settings.SETTINGS_STORE_PROVIDER)

    if not hasattr(app.state, "app_state"):
        try:
            app.state.app_state = await AppState.create()
            logger.info("Application state initialized successfully")
        except Exception as exc:
            logger.critical("Startup failed: %s", exc, exc_info=True)
            raise

    logger.info("Server ready to accept requests")
    logger.info("=" * 60)

    yield  # Application running

    # Shutdown
    logger.info("Shutting down...")
    if hasattr(app.state, "app_state"):
        try:
            await app.state.app_state.settings_store.close()
            logger.info("Settings store connection closed")
        except Exception as e:
            logger.error("Error during shutdown: %s", e)
    logger.info("Shutdown complete")


# =============================================================================
# FastAPI Application
# =============================================================================

def create_app(app_state: AppState | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_state: Prebuilt state (tests inject fakes); built at startup
            from configuration when omitted

    Returns:
        Configured FastAPI application instance
    """
    application = FastAPI(
        title="CRM AI Gateway",
        description=(
            "Provider-agnostic AI request gateway for a multi-tenant CRM. "
            "Each tenant brings their own Gemini, OpenAI or Anthropic key."
        ),
        version=API_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    if app_state is not None:
        application.state.app_state = app_state

    configure_cors(application)
    configure_exception_handlers(application)
    configure_routes(application)
    application.openapi = lambda: custom_openapi(application)

    return application


# =============================================================================
# CORS Configuration
# =============================================================================

def configure_cors(application: FastAPI) -> None:
    """Configure CORS middleware."""
    cors_origins = settings.CORS_ORIGINS_LIST
    allow_credentials = cors_origins != ["*"]

    if not allow_credentials:
        logger.warning(
            "[WARNING] CORS: Wildcard origin '*' configured. "
            "This disables credentials and is NOT recommended for production."
        )
    else:
        logger.info("CORS: Configured for origins: %s", cors_origins)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )


# =============================================================================
# Exception Handlers
# =============================================================================

def configure_exception_handlers(application: FastAPI) -> None:
    """Configure exception handlers; every error body is ``{"error": message}``."""

    @application.exception_handler(GatewayException)
    async def gateway_exception_handler(
        request: Request,
        exc: GatewayException,
    ) -> JSONResponse:
        """Handle custom gateway exceptions."""
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "GatewayException | path=%s | code=%s | message=%s | details=%s",
            request.url.path,
            exc.error_code,
            exc.message,
            exc.details,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Render routing errors (wrong verb, unknown path) in the gateway shape."""
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            not_allowed = MethodNotAllowedError()
            logger.info("Method not allowed | method=%s | path=%s", request.method, request.url.path)
            return JSONResponse(
                status_code=not_allowed.status_code,
                content=not_allowed.to_dict(),
                headers=getattr(exc, "headers", None),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Reject unparseable bodies with 400 instead of FastAPI's 422."""
        logger.info(
            "Request validation failed | path=%s | errors=%d",
            request.url.path,
            len(exc.errors()),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": INVALID_BODY_MESSAGE},
        )

    @application.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions; the message is returned unscrubbed."""
        logger.error(
            "Unhandled exception | path=%s | type=%s | error=%s",
            request.url.path,
            type(exc).__name__,
            exc,
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc) or "Internal server error"},
        )


# =============================================================================
# Route Configuration
# =============================================================================

def configure_routes(application: FastAPI) -> None:
    """Configure application routes."""
    application.include_router(health.router)
    application.include_router(ai_routes.router)


# =============================================================================
# Custom OpenAPI Schema
# =============================================================================

def custom_openapi(application: FastAPI) -> dict[str, Any]:
    """Generate custom OpenAPI schema with additional metadata."""
    if application.openapi_schema:
        return application.openapi_schema

    openapi_schema = get_openapi(
        title=application.title,
        version=application.version,
        description=application.description,
        routes=application.routes,
    )

    openapi_schema["servers"] = [
        {"url": "/", "description": "Current server"},
    ]
    openapi_schema["info"]["contact"] = {
        "name": "CRM AI Gateway",
    }

    application.openapi_schema = openapi_schema
    return application.openapi_schema


# =============================================================================
# Application Instance
# =============================================================================

app = create_app()
