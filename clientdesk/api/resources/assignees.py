# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Assignee API endpoints.

- GET / - Known assignee names (public)
- POST / - Add a name
- DELETE /?name= - Remove a name; tasks keep their assignments
"""

from fastapi import APIRouter, Query, status

from clientdesk.api.dependencies import DB, AuthenticatedUser
from clientdesk.domains.assignee import AssigneeService
from clientdesk.models.assignee import AssigneeRequest, AssigneeResponse
from clientdesk.models.common import DataResponse, MessageResponse

router = APIRouter()


@router.get(
    "",
    response_model=DataResponse[list[str]],
    summary="List assignees",
    description="Names from the assignee list merged with names used on tasks.",
)
async def list_assignees(db: DB) -> DataResponse[list[str]]:
    """List assignee names."""
    names = await AssigneeService(db).list_names()
    return DataResponse(data=names)


@router.post(
    "",
    response_model=DataResponse[AssigneeResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add assignee",
)
async def add_assignee(
    current_user: AuthenticatedUser,
    data: AssigneeRequest,
    db: DB,
) -> DataResponse[AssigneeResponse]:
    """Add an assignee name."""
    assignee = await AssigneeService(db).add(data.name)
    return DataResponse(data=assignee)


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Remove assignee",
)
async def remove_assignee(
    current_user: AuthenticatedUser,
    db: DB,
    name: str | None = Query(default=None),
) -> MessageResponse:
    """Remove an assignee name."""
    await AssigneeService(db).remove(name)
    return MessageResponse(message="Assignee deleted successfully")
