# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check and diagnostics endpoints.

Both endpoints are unauthenticated. The debug endpoint reports which
settings are present, never their values, and is disabled in
production unless DEBUG_EXPOSE_DEBUG_ENDPOINT is set.
"""

import logging
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from clientdesk.api.dependencies import AppSettings, Database
from clientdesk.core.errors import NotFoundError
from clientdesk.domains.user import UserService
from clientdesk.infrastructure.database import DatabaseError
from clientdesk.models.common import UTCDatetime
from clientdesk.utils.datetime import format_iso, utc_now

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""
    success: bool = True
    message: str = Field(description="Connection status message")
    timestamp: datetime = Field(description="Current server timestamp")
    environment: str = Field(description="Deployment environment")


class EnvironmentCheck(BaseModel):
    """Which configuration values are present."""
    model_config = ConfigDict(populate_by_name=True)

    database_url: bool = Field(alias="DATABASE_URL")
    jwt_secret: bool = Field(alias="JWT_SECRET")
    environment: str = Field(alias="ENVIRONMENT")


class DebugUser(BaseModel):
    """Username-only user entry."""
    username: str
    id: str
    created: UTCDatetime


class DatabaseCheck(BaseModel):
    """Database connectivity and user table summary."""
    model_config = ConfigDict(populate_by_name=True)

    status: str
    user_count: int = Field(default=0, alias="userCount")
    users: list[DebugUser] = Field(default_factory=list)


class DebugResponse(BaseModel):
    """Diagnostics response model."""
    success: bool = True
    environment: EnvironmentCheck
    database: DatabaseCheck
    timestamp: datetime


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={500: {"description": "Database connection failed"}},
)
async def health_check(database: Database, settings: AppSettings) -> HealthResponse | JSONResponse:
    """Check that the database is reachable.

    Returns:
        HealthResponse, or a 500 error envelope if the connection fails.
    """
    try:
        await database.ensure_connection()
    except DatabaseError as e:
        logger.error("Health check failed: %s", e.message)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Database connection failed",
                "timestamp": format_iso(utc_now()),
            },
        )

    return HealthResponse(
        message="Database connection successful",
        timestamp=utc_now(),
        environment=settings.environment,
    )


@router.get("/debug", response_model=DebugResponse, response_model_by_alias=True)
async def debug_info(database: Database, settings: AppSettings) -> DebugResponse:
    """Report configuration presence and database status.

    Raises:
        NotFoundError: If the endpoint is disabled.
    """
    if not settings.diagnostics.expose_debug_endpoint:
        raise NotFoundError()

    environment = EnvironmentCheck(
        database_url=settings.database.is_configured,
        jwt_secret=bool(settings.jwt.secret_key.get_secret_value()),
        environment=settings.environment,
    )

    try:
        async with database.session() as session:
            service = UserService(session)
            user_count = await service.count_users()
            users = await service.first_users(limit=5)
            db_check = DatabaseCheck(
                status="Connected",
                user_count=user_count,
                users=[
                    DebugUser(username=user.username, id=user.id, created=user.created_at)
                    for user in users
                ],
            )
    except DatabaseError as e:
        logger.warning("Debug database check failed: %s", e.message)
        db_check = DatabaseCheck(status=f"Error: {e.message}")

    return DebugResponse(environment=environment, database=db_check, timestamp=utc_now())
