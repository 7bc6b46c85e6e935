# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Task manager API endpoints.

- GET / - List tasks, newest first
- POST / - Create task (canEditTasks)
- GET /{task_id} - Get task
- PUT /{task_id} - Partial update (canEditTasks)
- DELETE /{task_id} - Delete task (canEditTasks)
"""

from fastapi import APIRouter, status

from clientdesk.api.dependencies import DB, AuthenticatedUser, TaskEditor
from clientdesk.domains.task import TaskService
from clientdesk.models.common import DataResponse, DeletedResponse
from clientdesk.models.task import TaskCreateRequest, TaskResponse, TaskUpdateRequest

router = APIRouter()


@router.get(
    "",
    response_model=DataResponse[list[TaskResponse]],
    summary="List tasks",
)
async def list_tasks(
    current_user: AuthenticatedUser,
    db: DB,
) -> DataResponse[list[TaskResponse]]:
    """List all tasks."""
    tasks = await TaskService(db).list_tasks()
    return DataResponse(data=tasks)


@router.post(
    "",
    response_model=DataResponse[TaskResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
)
async def create_task(
    current_user: TaskEditor,
    data: TaskCreateRequest,
    db: DB,
) -> DataResponse[TaskResponse]:
    """Create a task attributed to the acting user."""
    task = await TaskService(db).create_task(data, username=current_user.username)
    return DataResponse(data=task)


@router.get(
    "/{task_id}",
    response_model=DataResponse[TaskResponse],
    summary="Get task",
)
async def get_task(
    task_id: str,
    current_user: AuthenticatedUser,
    db: DB,
) -> DataResponse[TaskResponse]:
    """Get a single task."""
    task = await TaskService(db).get_task(task_id)
    return DataResponse(data=task)


@router.put(
    "/{task_id}",
    response_model=DataResponse[TaskResponse],
    summary="Update task",
    description="Fields absent from the body are left unchanged.",
)
async def update_task(
    task_id: str,
    current_user: TaskEditor,
    data: TaskUpdateRequest,
    db: DB,
) -> DataResponse[TaskResponse]:
    """Update a task."""
    task = await TaskService(db).update_task(task_id, data)
    return DataResponse(data=task)


@router.delete(
    "/{task_id}",
    response_model=DeletedResponse[TaskResponse],
    summary="Delete task",
)
async def delete_task(
    task_id: str,
    current_user: TaskEditor,
    db: DB,
) -> DeletedResponse[TaskResponse]:
    """Delete a task and return the removed record."""
    task = await TaskService(db).delete_task(task_id)
    return DeletedResponse(message="Task deleted successfully", data=task)
