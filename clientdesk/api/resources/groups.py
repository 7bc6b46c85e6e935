# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Client group API endpoints.

- GET / - List groups sorted by name (public)
- POST / - Create group
- PUT /{group_id} - Rename group
- DELETE /{group_id} - Delete group
"""

from fastapi import APIRouter, status

from clientdesk.api.dependencies import DB, AuthenticatedUser
from clientdesk.domains.group import GroupService
from clientdesk.models.common import DataResponse
from clientdesk.models.group import GroupRequest, GroupResponse

router = APIRouter()


@router.get(
    "",
    response_model=DataResponse[list[GroupResponse]],
    summary="List groups",
)
async def list_groups(db: DB) -> DataResponse[list[GroupResponse]]:
    """List all groups."""
    groups = await GroupService(db).list_groups()
    return DataResponse(data=groups)


@router.post(
    "",
    response_model=DataResponse[GroupResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create group",
    description="Names are trimmed and must be unique regardless of case.",
)
async def create_group(
    current_user: AuthenticatedUser,
    data: GroupRequest,
    db: DB,
) -> DataResponse[GroupResponse]:
    """Create a group."""
    group = await GroupService(db).create_group(data.name)
    return DataResponse(data=group)


@router.put(
    "/{group_id}",
    response_model=DataResponse[GroupResponse],
    summary="Rename group",
)
async def rename_group(
    group_id: str,
    current_user: AuthenticatedUser,
    data: GroupRequest,
    db: DB,
) -> DataResponse[GroupResponse]:
    """Rename a group."""
    group = await GroupService(db).rename_group(group_id, data.name)
    return DataResponse(data=group)


@router.delete(
    "/{group_id}",
    response_model=DataResponse[GroupResponse],
    summary="Delete group",
)
async def delete_group(
    group_id: str,
    current_user: AuthenticatedUser,
    db: DB,
) -> DataResponse[GroupResponse]:
    """Delete a group and return the deleted record."""
    group = await GroupService(db).delete_group(group_id)
    return DataResponse(data=group)
