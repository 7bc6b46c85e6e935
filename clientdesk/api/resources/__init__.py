# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API resource routes.

Each module provides a FastAPI router for one resource, mounted under
the /api prefix.

Modules:
    auth: Login, logout and session verification.
    users: User management.
    clients: Clients with embedded notes, tasks and login details.
    groups: Client group labels.
    hosting: Hosting services with derived expiry status.
    tasks: Task manager.
    assignees: Assignee names.
"""

from fastapi import APIRouter

from clientdesk.api.resources import assignees, auth, clients, groups, hosting, tasks, users

router = APIRouter(prefix="/api")

router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(users.router, prefix="/users", tags=["Users"])
router.include_router(clients.router, prefix="/clients", tags=["Clients"])
router.include_router(groups.router, prefix="/groups", tags=["Groups"])
router.include_router(hosting.router, prefix="/hosting", tags=["Hosting"])
router.include_router(tasks.router, prefix="/tasks", tags=["Tasks"])
router.include_router(assignees.router, prefix="/assignees", tags=["Assignees"])

__all__ = ["router"]
