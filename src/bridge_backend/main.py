"""
Module: main.py
Description: FastAPI application entry point for the bridge backend.

Builds the FastAPI application with the API key middleware, CORS,
health check and error handlers.
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi import status as status_codes
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum

from bridge_backend.auth.api_key import AuthPolicy
from bridge_backend.auth.middleware import ApiKeyMiddleware
from bridge_backend.config.settings import Settings, settings as default_settings
from bridge_backend.models.response import ErrorResponse, HealthResponse
from bridge_backend.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create the FastAPI application.

    The authorization policy is read from settings once, here, and
    injected into the middleware. Bridge API routers included on the
    returned app sit behind ApiKeyMiddleware; only /health and the
    docs are exempt.

    Args:
        app_settings: Settings to use (defaults to the global settings)

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or default_settings
    configure_logging(app_settings.log_level)

    app = FastAPI(
        title=app_settings.app_name,
        description="Bridge backend API",
        version=app_settings.app_version,
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc"  # ReDoc
    )

    # Added first so CORS wraps it and answers preflight requests
    app.add_middleware(
        ApiKeyMiddleware,
        policy=AuthPolicy.from_settings(app_settings)
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """
        Health check endpoint.

        Served without authorization.
        """
        logger.info("Health check requested")

        return HealthResponse(
            status="ok",
            message="Bridge backend is healthy",
            version=app_settings.app_version,
            environment=app_settings.stage
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """
        Global exception handler for unhandled errors.

        Logs unexpected exceptions and returns a generic error envelope.
        """
        logger.error(
            "Unhandled exception occurred",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            method=request.method
        )

        body = ErrorResponse.build(
            message="Internal server error",
            status=status_codes.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return JSONResponse(
            status_code=status_codes.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump()
        )

    @app.on_event("startup")
    async def startup_event():
        """Application startup event handler."""
        logger.info(
            "Starting bridge backend",
            version=app_settings.app_version,
            stage=app_settings.stage,
            api_key_required=app_settings.api_key is not None
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        """Application shutdown event handler."""
        logger.info("Shutting down bridge backend")

    return app


app = create_app()

# Lambda handler
handler = Mangum(app, lifespan="off")
