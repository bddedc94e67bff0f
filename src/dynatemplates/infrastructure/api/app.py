"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with middleware, routes,
and lifecycle handlers.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dynatemplates.core.config import Settings, get_settings
from dynatemplates.core.exceptions import TemplateError
from dynatemplates.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from dynatemplates.infrastructure.engines import EngineRegistry
from dynatemplates.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings = get_settings()
    configure_logging(settings)

    logger.info(
        "Starting dynatemplates",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        template_engines=app.state.engine_registry.supported_template_formats(),
        language_engines=app.state.engine_registry.supported_language_formats(),
    )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down dynatemplates")
    await close_database()
    logger.info("Database connection closed")


def create_app(
    settings: Settings | None = None,
    engine_registry: EngineRegistry | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings; defaults to the cached application settings.
        engine_registry: Optional prebuilt registry, e.g. one carrying custom
            filters. Built from the settings when omitted.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Multi-tenant template resolution and rendering",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    # Read once; shared by every request afterwards
    app.state.engine_registry = engine_registry or EngineRegistry(
        settings.engine_registry_config()
    )

    register_health_check(app, settings)
    register_routes(app, settings)
    register_exception_handlers(app, settings)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI, settings: Settings) -> None:
    """Register health check endpoints.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check endpoint."""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Readiness check endpoint, including database connectivity."""
        db = get_db_manager()
        if await db.check_connection():
            return {
                "status": "ready",
                "service": settings.app_name,
                "version": settings.app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": settings.app_name,
                "database": "disconnected",
            },
        )


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """
    from dynatemplates.infrastructure.api.routes import (
        template_layouts_router,
        templates_router,
    )

    app.include_router(templates_router, prefix=f"{settings.api_prefix}/templates")
    app.include_router(
        template_layouts_router, prefix=f"{settings.api_prefix}/template-layouts"
    )

    @app.get(settings.api_prefix, tags=["root"])
    async def api_root():
        """API root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_version": "v1",
            "template_engines": app.state.engine_registry.supported_template_formats(),
            "language_engines": app.state.engine_registry.supported_language_formats(),
        }


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """

    @app.exception_handler(TemplateError)
    async def template_error_handler(request: Request, exc: TemplateError):
        """Map template errors to their status code and error body."""
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "Template error",
            path=str(request.url.path),
            method=request.method,
            error_code=exc.error_code,
            error=exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if settings.debug else "An unexpected error occurred",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware.

    Args:
        app: FastAPI application instance.
    """

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request and propagate a correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID", f"cid_{uuid.uuid4().hex[:12]}")
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


# Create the application instance
app = create_app()
