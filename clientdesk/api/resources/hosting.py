# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Hosting service API endpoints.

- GET / - List hosting services, soonest expiry first
- POST / - Create (canEditClients)
- PUT /{hosting_id} - Update (canEditClients)
- DELETE /{hosting_id} - Delete (admin only)

Status (active, expiring_soon, expired) is recomputed from the end date
on every save.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from clientdesk.api.dependencies import DB, AuthenticatedUser, ClientEditor, RequireAdmin
from clientdesk.api.middleware.auth import CurrentUser
from clientdesk.domains.hosting import HostingServiceManager
from clientdesk.models.common import DataResponse, MessageResponse
from clientdesk.models.hosting import HostingCreateRequest, HostingResponse, HostingUpdateRequest

router = APIRouter()


@router.get(
    "",
    response_model=DataResponse[list[HostingResponse]],
    summary="List hosting services",
)
async def list_hosting(
    current_user: AuthenticatedUser,
    db: DB,
) -> DataResponse[list[HostingResponse]]:
    """List hosting services sorted by end date."""
    services = await HostingServiceManager(db).list_services()
    return DataResponse(data=services)


@router.post(
    "",
    response_model=DataResponse[HostingResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create hosting service",
)
async def create_hosting(
    current_user: ClientEditor,
    data: HostingCreateRequest,
    db: DB,
) -> DataResponse[HostingResponse]:
    """Create a hosting service stamped with the acting user."""
    hosting = await HostingServiceManager(db).create(data, username=current_user.username)
    return DataResponse(data=hosting)


@router.put(
    "/{hosting_id}",
    response_model=DataResponse[HostingResponse],
    summary="Update hosting service",
)
async def update_hosting(
    hosting_id: str,
    current_user: ClientEditor,
    data: HostingUpdateRequest,
    db: DB,
) -> DataResponse[HostingResponse]:
    """Update a hosting service."""
    hosting = await HostingServiceManager(db).update(hosting_id, data, username=current_user.username)
    return DataResponse(data=hosting)


@router.delete(
    "/{hosting_id}",
    response_model=MessageResponse,
    summary="Delete hosting service",
)
async def delete_hosting(
    hosting_id: str,
    current_user: Annotated[
        CurrentUser, Depends(RequireAdmin("Only administrators can delete hosting services"))
    ],
    db: DB,
) -> MessageResponse:
    """Delete a hosting service."""
    await HostingServiceManager(db).delete(hosting_id)
    return MessageResponse(message="Hosting service deleted successfully")
