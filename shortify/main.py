"""Main application module.

This module builds the FastAPI application: it wires routes, middleware and
exception handlers, and owns the database engine for the process lifetime.

Run with ``uvicorn shortify.main:app``.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine

from shortify.api import build_api_router
from shortify.core.config import Settings, settings as default_settings
from shortify.core.logging import setup_logging
from shortify.db.base import build_session_factory, create_tables, get_engine
from shortify.middleware.logging import RequestLoggingMiddleware
from shortify.services.exceptions import URLValidationError


def _attach_engine(app: FastAPI, engine: AsyncEngine) -> None:
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the engine on startup unless one was injected, dispose it on shutdown."""
    settings: Settings = app.state.settings
    owns_engine = getattr(app.state, "engine", None) is None

    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")

    if owns_engine:
        _attach_engine(app, get_engine(settings))
    if settings.DB_CREATE_TABLES:
        await create_tables(app.state.engine)

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")
    if owns_engine:
        await app.state.engine.dispose()
        app.state.engine = None
        app.state.session_factory = None


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(URLValidationError)
    async def url_validation_exception_handler(request: Request, exc: URLValidationError):
        logger.info(f"Rejected create request: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": "Invalid URL",
                "error_code": exc.errors[0].kind.value if exc.errors else None,
                "field_errors": [
                    {"field": e.field, "kind": e.kind.value, "reason": e.reason}
                    for e in exc.errors
                ],
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler to catch and log all unhandled exceptions."""
        error_id = f"error-{time.time()}"
        logger.opt(exception=exc).error(
            f"Unhandled exception in {request.method} {request.url.path}",
            error_id=error_id,
        )
        debug = app.state.settings.DEBUG
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error occurred",
                "error_id": error_id,
                "message": str(exc) if debug else "Internal server error",
            },
        )


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use, defaults to the environment-loaded settings
        engine: An engine to use instead of creating one at startup. The
            caller keeps ownership and must dispose it.

    Returns:
        FastAPI: The configured application
    """
    settings = settings or default_settings
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = None
    app.state.session_factory = None
    if engine is not None:
        _attach_engine(app, engine)

    if settings.REQUEST_LOGGING_ENABLED:
        app.add_middleware(RequestLoggingMiddleware)

    # Added last so it is outermost; responses from the Exception handler
    # are produced by ServerErrorMiddleware outside it and carry no CORS headers
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=settings.CORS_METHODS,
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(build_api_router(settings.API_PREFIX))

    return app


app = create_app()
