"""
FastAPI application entry point for the Errand Platform backend.

This module provides:
- Application factory wiring middleware, exception handlers and routers
- Startup gate: both database handles must connect before serving
- Welcome, health, readiness and metrics endpoints
- ``main()``: fatal exit on missing configuration, then uvicorn

Run with ``python -m backend.src.main`` or
``uvicorn backend.src.main:create_app --factory``.
"""

import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.src import __version__
from backend.src.config import Settings, get_settings
from backend.src.database import MongoConnector
from backend.src.errors import DatabaseConnectionError
from backend.src.middleware import RequestLoggingMiddleware, TaskOwnerMiddleware
from backend.src.routers import agents, analytics, login, register, tasks, users
from shared.logging import configure_logging

logger = structlog.get_logger(__name__)

WELCOME_MESSAGE = "Welcome to the Errand Platform Backend!"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred!"


# ============================================================================
# Lifespan Management
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect both database handles before the app accepts requests.

    A connection failure is logged and re-raised, which aborts server
    startup before the listening socket is opened.
    """
    settings: Settings = app.state.settings
    connector: MongoConnector = app.state.connector

    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )

    try:
        await connector.connect()
    except DatabaseConnectionError as e:
        logger.error("application_startup_failed", handle=e.handle, error=e.reason)
        raise

    logger.info("application_started", database=connector.status())

    try:
        yield
    finally:
        logger.info("application_shutting_down")
        await connector.close()
        logger.info("application_shutdown_complete")


# ============================================================================
# Exception Handlers
# ============================================================================

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    logger.warning("validation_error", path=request.url.path, errors=exc.errors())
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": "Invalid request body.", "details": jsonable_encoder(exc.errors())}
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions (404 for unknown paths, 405, ...)."""
    logger.warning(
        "http_exception",
        path=request.url.path,
        status_code=exc.status_code,
        detail=exc.detail
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Catch-all for anything that escaped the route boundary."""
    logger.error(
        "unexpected_exception",
        path=request.url.path,
        error=str(exc),
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": UNEXPECTED_ERROR_MESSAGE}
    )


# ============================================================================
# Application Factory
# ============================================================================

def create_app(
    settings: Optional[Settings] = None,
    connector: Optional[MongoConnector] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        connector: Persistence connector (defaults to a MongoConnector)

    Returns:
        Configured FastAPI application; the database is connected by its lifespan
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="REST API for agents, users, tasks, registration, login and analytics.",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.connector = connector or MongoConnector(settings)

    # Middleware: the last one added runs first.
    app.add_middleware(TaskOwnerMiddleware, prefixes=settings.task_route_prefixes)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    _add_service_routes(app, settings)

    app.include_router(agents.router)
    app.include_router(users.router)
    app.include_router(tasks.router, prefix="/api/tasks")
    app.include_router(tasks.router, prefix="/tasks", include_in_schema=False)
    app.include_router(register.router)
    app.include_router(login.router)
    app.include_router(analytics.router)

    return app


def _add_service_routes(app: FastAPI, settings: Settings) -> None:
    @app.get("/", tags=["Health"])
    async def welcome() -> Dict[str, str]:
        return {"message": WELCOME_MESSAGE}

    @app.get("/health", tags=["Health"])
    async def health_check() -> Dict[str, Any]:
        """Liveness: does not touch the database."""
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": __version__,
            "environment": settings.environment
        }

    @app.get("/ready", tags=["Health"])
    async def readiness_check(request: Request) -> JSONResponse:
        """Readiness: both database handles must be connected."""
        connector: MongoConnector = request.app.state.connector
        ready = connector.is_ready
        return JSONResponse(
            status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "ready" if ready else "not_ready",
                "service": settings.app_name,
                "checks": connector.status()
            }
        )

    if settings.metrics_enabled:
        @app.get("/metrics", tags=["Monitoring"], response_class=PlainTextResponse)
        async def metrics() -> Response:
            return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


# ============================================================================
# Application Entry Point
# ============================================================================

def main() -> None:
    """
    Load settings and serve.

    Exits with status 1 before opening any socket when configuration is
    invalid (including a missing MONGO_URI). Database failures abort inside
    the lifespan, also before the socket is bound.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging(service_name="errand-backend")
        logger.error("configuration_invalid", errors=jsonable_encoder(e.errors(include_url=False, include_input=False)))
        sys.exit(1)

    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        service_name="errand-backend",
        environment=settings.environment,
    )

    logger.info("starting_uvicorn_server", host=settings.host, port=settings.port)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
