# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Hosting service management for renewal tracking.

Every save stamps the acting username into the audit fields and
recomputes the status from the end date.

Example:
    >>> service = HostingServiceManager(db)
    >>> hosting = await service.create(request, username="alice")
    >>> hosting.status
    <HostingStatus.EXPIRING_SOON: 'expiring_soon'>
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.core.errors import NotFoundError
from clientdesk.infrastructure.database.models.hosting import HostingService
from clientdesk.models.hosting import (
    HostingCreateRequest,
    HostingResponse,
    HostingUpdateRequest,
)

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = frozenset({"website_url", "notes"})


class HostingNotFoundError(NotFoundError):
    """Raised when a hosting service is not found."""

    default_message = "Hosting service not found"


class HostingServiceManager:
    """CRUD for hosting services.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def list_services(self) -> list[HostingResponse]:
        """List hosting services, soonest end date first."""
        result = await self._db.execute(select(HostingService).order_by(HostingService.end_date))
        return [HostingResponse.model_validate(item) for item in result.scalars().all()]

    async def create(self, request: HostingCreateRequest, username: str) -> HostingResponse:
        """Create a hosting service.

        Args:
            request: Hosting details.
            username: Acting user, stamped as creator and last editor.

        Returns:
            Created hosting service.
        """
        hosting = HostingService(
            **request.model_dump(),
            created_by=username,
            updated_by=username,
        )
        hosting.refresh_status()

        self._db.add(hosting)
        await self._db.commit()

        logger.info("Hosting service created: %s by %s", hosting.id, username)

        return HostingResponse.model_validate(hosting)

    async def update(
        self,
        hosting_id: str,
        request: HostingUpdateRequest,
        username: str,
    ) -> HostingResponse:
        """Apply a partial update.

        Args:
            hosting_id: Hosting service identifier.
            request: Fields to change; fields absent from the body are kept.
            username: Acting user, stamped as last editor.

        Returns:
            Updated hosting service.

        Raises:
            HostingNotFoundError: If not found.
        """
        hosting = await self._db.get(HostingService, hosting_id)
        if not hosting:
            raise HostingNotFoundError()

        for field, value in request.model_dump(exclude_unset=True).items():
            if value is None and field not in NULLABLE_FIELDS:
                continue
            setattr(hosting, field, value)

        hosting.updated_by = username
        hosting.refresh_status()

        await self._db.commit()
        await self._db.refresh(hosting)

        logger.info("Hosting service updated: %s by %s", hosting.id, username)

        return HostingResponse.model_validate(hosting)

    async def delete(self, hosting_id: str) -> None:
        """Delete a hosting service.

        Raises:
            HostingNotFoundError: If not found.
        """
        hosting = await self._db.get(HostingService, hosting_id)
        if not hosting:
            raise HostingNotFoundError()

        await self._db.delete(hosting)
        await self._db.commit()

        logger.info("Hosting service deleted: %s", hosting_id)
