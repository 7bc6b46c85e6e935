# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the ClientDesk API.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded

from clientdesk import __version__
from clientdesk.api.errors import register_exception_handlers
from clientdesk.api.middleware.auth import AuthMiddleware
from clientdesk.api.middleware.rate_limit import configure_limiter, rate_limit_exceeded_handler
from clientdesk.api.resources import router as api_router
from clientdesk.api.routes import health
from clientdesk.core.config import Settings, get_settings
from clientdesk.domains.auth.jwt import JWTManager
from clientdesk.infrastructure.database import DatabaseConnection
from clientdesk.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Creates the connection cache on app.state and disposes it on
    shutdown. A database that is unreachable at startup does not stop
    the application; the first request retries the connection.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info("Starting ClientDesk API (environment=%s)", settings.environment)

    # =========================================================================
    # Startup
    # =========================================================================
    database = DatabaseConnection(settings.database)
    app.state.database = database

    try:
        await database.ensure_connection()
        logger.info("Database connection initialized")
    except Exception as e:
        logger.warning("Failed to initialize database connection: %s", str(e))

    if not settings.is_production and database.is_connected:
        try:
            await database.create_schema()
        except Exception as e:
            logger.warning("Failed to create database schema: %s", str(e))

    yield

    # =========================================================================
    # Shutdown
    # =========================================================================
    try:
        await database.close()
        logger.info("Database connection closed")
    except Exception as e:
        logger.warning("Error closing database connection: %s", str(e))

    logger.info("Shutting down ClientDesk API")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a new FastAPI instance with all
    middleware, routes, and configurations applied.

    Args:
        settings: Application settings. Defaults to get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="ClientDesk API",
        description="Client, task and hosting management for a web agency",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    # =========================================================================
    # State
    # =========================================================================
    app.state.settings = settings
    app.state.jwt_manager = JWTManager(settings.jwt)
    app.state.limiter = configure_limiter(settings)

    # =========================================================================
    # Exception handlers
    # =========================================================================
    register_exception_handlers(app)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # =========================================================================
    # Middleware (order matters - last added is first executed)
    # =========================================================================
    app.add_middleware(
        AuthMiddleware,
        jwt_manager=app.state.jwt_manager,
        cookie_name=settings.cookie.name,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(api_router)

    return app
