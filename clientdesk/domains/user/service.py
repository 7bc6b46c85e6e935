# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User service for account management.

This module provides the UserService that handles:
- Listing users (full records or username-only summaries)
- Account creation with bcrypt-hashed passwords
- Role and permission updates
- Password resets and deletion

Example:
    >>> user_service = UserService(db_session)
    >>> user = await user_service.create_user(request)
    >>> users = await user_service.list_users(full=True)
"""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.core.errors import ConflictError, NotFoundError, ValidationError
from clientdesk.domains.auth.password import MIN_PASSWORD_LENGTH, PasswordHasher
from clientdesk.domains.auth.permissions import PermissionSet, Role
from clientdesk.infrastructure.database.models.user import User
from clientdesk.models.user import (
    UserCreateRequest,
    UserResponse,
    UserSummary,
    UserUpdateRequest,
)

logger = logging.getLogger(__name__)

PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    default_message = "User not found"


class UserAlreadyExistsError(ConflictError):
    """Raised when a username or email is already taken."""

    default_message = "Username or email already exists"


class UserService:
    """Service for managing user accounts.

    Attributes:
        _db: Async database session.
        _hasher: Password hasher.

    Example:
        >>> service = UserService(db)
        >>> user = await service.create_user(create_request)
        >>> await service.reset_password(user.id, "new-password")
    """

    def __init__(self, db: AsyncSession, hasher: PasswordHasher | None = None) -> None:
        """Initialize the user service.

        Args:
            db: Async database session.
            hasher: Password hasher. Defaults to bcrypt with 10 rounds.
        """
        self._db = db
        self._hasher = hasher or PasswordHasher()

    async def list_users(self, full: bool) -> list[UserResponse] | list[UserSummary]:
        """List users.

        Args:
            full: Return complete records (newest first) instead of
                id/username summaries (alphabetical).

        Returns:
            List of user responses or summaries.
        """
        if full:
            result = await self._db.execute(select(User).order_by(User.created_at.desc()))
            return [self._to_response(user) for user in result.scalars().all()]

        result = await self._db.execute(select(User).order_by(User.username))
        return [UserSummary(id=user.id, username=user.username) for user in result.scalars().all()]

    async def create_user(self, request: UserCreateRequest) -> UserResponse:
        """Create a new user.

        Args:
            request: User creation request.

        Returns:
            Created user response.

        Raises:
            ValidationError: If a required field is missing or the password
                is too short.
            UserAlreadyExistsError: If the username or email is taken.
        """
        username = (request.username or "").strip()
        email = (request.email or "").strip().lower()

        if not username or not email or not request.password:
            raise ValidationError("Username, email, and password are required")

        if len(request.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(PASSWORD_TOO_SHORT, field="password")

        await self._ensure_unique(username=username, email=email)

        role = request.role or Role.TEAM_MEMBER
        permissions = request.permissions or PermissionSet.for_role(role)

        user = User(
            username=username,
            email=email,
            password_hash=self._hasher.hash(request.password),
            role=role.value,
            permissions=permissions.to_claims(),
        )

        self._db.add(user)
        await self._commit()
        await self._db.refresh(user)

        logger.info("User created: %s (role=%s)", user.id, user.role)

        return self._to_response(user)

    async def update_user(self, user_id: str, request: UserUpdateRequest) -> UserResponse:
        """Update a user's profile, role or permissions.

        Args:
            user_id: User identifier.
            request: Update request. Passwords are not accepted here.

        Returns:
            Updated user response.

        Raises:
            ValidationError: If the role is not a known role.
            UserNotFoundError: If user not found.
            UserAlreadyExistsError: If the new username or email is taken.
        """
        if request.role is not None and request.role not in {r.value for r in Role}:
            raise ValidationError("Invalid role", field="role")

        user = await self._get_by_id(user_id)
        if not user:
            raise UserNotFoundError()

        username = request.username.strip() if request.username else None
        email = request.email.strip().lower() if request.email else None

        if (username and username != user.username) or (email and email != user.email):
            await self._ensure_unique(
                username=username if username != user.username else None,
                email=email if email != user.email else None,
                exclude_id=user.id,
            )

        if username:
            user.username = username
        if email:
            user.email = email
        if request.role is not None:
            user.role = request.role
        if request.permissions is not None:
            user.permissions = request.permissions.to_claims()

        await self._commit()
        await self._db.refresh(user)

        logger.info("User updated: %s", user.id)

        return self._to_response(user)

    async def delete_user(self, user_id: str, acting_user_id: str) -> None:
        """Delete a user.

        Args:
            user_id: User to delete.
            acting_user_id: User performing the deletion.

        Raises:
            ValidationError: If a user tries to delete their own account.
            UserNotFoundError: If user not found.
        """
        if user_id == acting_user_id:
            raise ValidationError("Cannot delete your own account")

        user = await self._get_by_id(user_id)
        if not user:
            raise UserNotFoundError()

        await self._db.delete(user)
        await self._db.commit()

        logger.info("User deleted: %s by %s", user_id, acting_user_id)

    async def reset_password(self, user_id: str, new_password: str | None) -> str:
        """Replace a user's password.

        Args:
            user_id: User identifier.
            new_password: New plain text password.

        Returns:
            The username whose password was reset.

        Raises:
            ValidationError: If the password is missing or too short.
            UserNotFoundError: If user not found.
        """
        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(PASSWORD_TOO_SHORT, field="newPassword")

        user = await self._get_by_id(user_id)
        if not user:
            raise UserNotFoundError()

        user.password_hash = self._hasher.hash(new_password)
        await self._db.commit()

        logger.info("Password reset for user %s", user.id)

        return user.username

    async def count_users(self) -> int:
        """Count all users."""
        result = await self._db.execute(select(func.count()).select_from(User))
        return result.scalar_one()

    async def first_users(self, limit: int = 5) -> list[User]:
        """Return the oldest users, for diagnostics."""
        result = await self._db.execute(select(User).order_by(User.created_at).limit(limit))
        return list(result.scalars().all())

    # =========================================================================
    # Private helpers
    # =========================================================================

    async def _get_by_id(self, user_id: str) -> User | None:
        """Get user by ID."""
        return await self._db.get(User, user_id)

    async def _ensure_unique(
        self,
        username: str | None,
        email: str | None,
        exclude_id: str | None = None,
    ) -> None:
        """Raise if another user already has the username or email."""
        conditions = []
        if username:
            conditions.append(User.username == username)
        if email:
            conditions.append(User.email == email)
        if not conditions:
            return

        query = select(User.id).where(or_(*conditions))
        if exclude_id:
            query = query.where(User.id != exclude_id)

        result = await self._db.execute(query.limit(1))
        if result.scalar_one_or_none() is not None:
            raise UserAlreadyExistsError()

    async def _commit(self) -> None:
        """Commit, mapping a unique-constraint race to a conflict."""
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise UserAlreadyExistsError() from e

    def _to_response(self, user: User) -> UserResponse:
        """Convert User model to response."""
        return UserResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            role=Role(user.role),
            permissions=user.permission_set,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
