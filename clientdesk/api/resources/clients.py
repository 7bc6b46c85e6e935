# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Client API endpoints.

Clients:
- GET / - List clients sorted by name (canViewClients)
- POST / - Create client (canEditClients)
- GET/PUT/DELETE /{client_id}

Embedded collections:
- POST /{client_id}/notes, PUT/DELETE /{client_id}/notes/{note_id}
- POST /{client_id}/tasks, PUT/DELETE /{client_id}/tasks/{task_id}
- PATCH /{client_id}/tasks/{task_id}/toggle-completion
- POST /{client_id}/logins, PUT/DELETE /{client_id}/logins/{login_id}

Deleting tasks and login details is restricted to administrators.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from clientdesk.api.dependencies import (
    DB,
    AuthenticatedUser,
    ClientEditor,
    ClientViewer,
    RequireAdmin,
)
from clientdesk.api.middleware.auth import CurrentUser
from clientdesk.domains.client import ClientService
from clientdesk.models.client import (
    ClientRequest,
    ClientResponse,
    ClientTaskRequest,
    ClientTaskResponse,
    LoginDetailRequest,
    LoginDetailResponse,
    NoteRequest,
    NoteResponse,
)
from clientdesk.models.common import DataResponse, MessageResponse

router = APIRouter()

TaskDeleter = Annotated[CurrentUser, Depends(RequireAdmin("Only administrators can delete tasks"))]
LoginDeleter = Annotated[
    CurrentUser, Depends(RequireAdmin("Only administrators can delete login details"))
]


# =========================================================================
# Clients
# =========================================================================


@router.get(
    "",
    response_model=DataResponse[list[ClientResponse]],
    summary="List clients",
)
async def list_clients(
    current_user: ClientViewer,
    db: DB,
) -> DataResponse[list[ClientResponse]]:
    """List all clients with their embedded collections."""
    clients = await ClientService(db).list_clients()
    return DataResponse(data=clients)


@router.post(
    "",
    response_model=DataResponse[ClientResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create client",
    description="Client names are unique regardless of case.",
)
async def create_client(
    current_user: ClientEditor,
    data: ClientRequest,
    db: DB,
) -> DataResponse[ClientResponse]:
    """Create a client."""
    client = await ClientService(db).create_client(data.name)
    return DataResponse(data=client)


@router.get(
    "/{client_id}",
    response_model=DataResponse[ClientResponse],
    summary="Get client",
)
async def get_client(
    client_id: str,
    current_user: AuthenticatedUser,
    db: DB,
) -> DataResponse[ClientResponse]:
    """Get a single client."""
    client = await ClientService(db).get_client(client_id)
    return DataResponse(data=client)


@router.put(
    "/{client_id}",
    response_model=DataResponse[ClientResponse],
    summary="Update client",
)
async def update_client(
    client_id: str,
    current_user: AuthenticatedUser,
    data: ClientRequest,
    db: DB,
) -> DataResponse[ClientResponse]:
    """Rename a client."""
    client = await ClientService(db).update_client(client_id, data)
    return DataResponse(data=client)


@router.delete(
    "/{client_id}",
    response_model=MessageResponse,
    summary="Delete client",
)
async def delete_client(
    client_id: str,
    current_user: AuthenticatedUser,
    db: DB,
) -> MessageResponse:
    """Delete a client and everything embedded in it."""
    await ClientService(db).delete_client(client_id)
    return MessageResponse(message="Client deleted successfully")


# =========================================================================
# Notes
# =========================================================================


@router.post(
    "/{client_id}/notes",
    response_model=DataResponse[NoteResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add note",
)
async def add_note(
    client_id: str,
    current_user: AuthenticatedUser,
    data: NoteRequest,
    db: DB,
) -> DataResponse[NoteResponse]:
    """Add a note to a client."""
    note = await ClientService(db).add_note(client_id, data, username=current_user.username)
    return DataResponse(data=note)


@router.put(
    "/{client_id}/notes/{note_id}",
    response_model=DataResponse[NoteResponse],
    summary="Update note",
)
async def update_note(
    client_id: str,
    note_id: str,
    current_user: AuthenticatedUser,
    data: NoteRequest,
    db: DB,
) -> DataResponse[NoteResponse]:
    """Edit a note."""
    note = await ClientService(db).update_note(
        client_id, note_id, data, username=current_user.username
    )
    return DataResponse(data=note)


@router.delete(
    "/{client_id}/notes/{note_id}",
    response_model=MessageResponse,
    summary="Delete note",
)
async def delete_note(
    client_id: str,
    note_id: str,
    current_user: AuthenticatedUser,
    db: DB,
) -> MessageResponse:
    """Delete a note."""
    await ClientService(db).delete_note(client_id, note_id)
    return MessageResponse(message="Note deleted successfully")


# =========================================================================
# Client tasks
# =========================================================================


@router.post(
    "/{client_id}/tasks",
    response_model=DataResponse[ClientTaskResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add client task",
)
async def add_task(
    client_id: str,
    current_user: AuthenticatedUser,
    data: ClientTaskRequest,
    db: DB,
) -> DataResponse[ClientTaskResponse]:
    """Add a task to a client."""
    task = await ClientService(db).add_task(client_id, data, username=current_user.username)
    return DataResponse(data=task)


@router.put(
    "/{client_id}/tasks/{task_id}",
    response_model=DataResponse[ClientTaskResponse],
    summary="Update client task",
)
async def update_task(
    client_id: str,
    task_id: str,
    current_user: AuthenticatedUser,
    data: ClientTaskRequest,
    db: DB,
) -> DataResponse[ClientTaskResponse]:
    """Edit a client task."""
    task = await ClientService(db).update_task(
        client_id, task_id, data, username=current_user.username
    )
    return DataResponse(data=task)


@router.patch(
    "/{client_id}/tasks/{task_id}/toggle-completion",
    response_model=DataResponse[ClientTaskResponse],
    summary="Toggle client task completion",
)
async def toggle_task_completion(
    client_id: str,
    task_id: str,
    current_user: AuthenticatedUser,
    db: DB,
) -> DataResponse[ClientTaskResponse]:
    """Flip a task between open and completed."""
    task = await ClientService(db).toggle_task_completion(
        client_id, task_id, username=current_user.username
    )
    return DataResponse(data=task)


@router.delete(
    "/{client_id}/tasks/{task_id}",
    response_model=MessageResponse,
    summary="Delete client task",
)
async def delete_task(
    client_id: str,
    task_id: str,
    current_user: TaskDeleter,
    db: DB,
) -> MessageResponse:
    """Delete a client task."""
    await ClientService(db).delete_task(client_id, task_id)
    return MessageResponse(message="Task deleted successfully")


# =========================================================================
# Login details
# =========================================================================


@router.post(
    "/{client_id}/logins",
    response_model=DataResponse[LoginDetailResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add login detail",
)
async def add_login(
    client_id: str,
    current_user: ClientEditor,
    data: LoginDetailRequest,
    db: DB,
) -> DataResponse[LoginDetailResponse]:
    """Store website credentials for a client."""
    login = await ClientService(db).add_login(client_id, data, username=current_user.username)
    return DataResponse(data=login)


@router.put(
    "/{client_id}/logins/{login_id}",
    response_model=DataResponse[LoginDetailResponse],
    summary="Update login detail",
)
async def update_login(
    client_id: str,
    login_id: str,
    current_user: ClientEditor,
    data: LoginDetailRequest,
    db: DB,
) -> DataResponse[LoginDetailResponse]:
    """Edit stored website credentials."""
    login = await ClientService(db).update_login(
        client_id, login_id, data, username=current_user.username
    )
    return DataResponse(data=login)


@router.delete(
    "/{client_id}/logins/{login_id}",
    response_model=MessageResponse,
    summary="Delete login detail",
)
async def delete_login(
    client_id: str,
    login_id: str,
    current_user: LoginDeleter,
    db: DB,
) -> MessageResponse:
    """Delete stored website credentials."""
    await ClientService(db).delete_login(client_id, login_id)
    return MessageResponse(message="Login detail deleted successfully")
