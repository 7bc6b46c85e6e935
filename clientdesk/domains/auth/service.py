# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication service for username/password login.

Example:
    >>> auth_service = AuthService(db_session, jwt_manager)
    >>> result = await auth_service.authenticate("alice", "secret")
    >>> result.token
    'eyJ...'
"""

import logging
from typing import NamedTuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.core.errors import UnauthenticatedError, ValidationError
from clientdesk.domains.auth.jwt import JWTManager, SessionClaims
from clientdesk.domains.auth.password import PasswordHasher
from clientdesk.domains.auth.permissions import Role
from clientdesk.infrastructure.database.models.user import User

logger = logging.getLogger(__name__)


class InvalidCredentialsError(UnauthenticatedError):
    """Raised when the username is unknown or the password does not match."""

    default_message = "Invalid credentials"


class AuthResult(NamedTuple):
    """Outcome of a successful login."""

    user: User
    token: str


class AuthService:
    """Verifies credentials against the user table and issues session tokens.

    Attributes:
        _db: Async database session.
        _jwt_manager: Session token issuer.
        _hasher: Password hasher.
    """

    def __init__(
        self,
        db: AsyncSession,
        jwt_manager: JWTManager,
        hasher: PasswordHasher | None = None,
    ) -> None:
        """Initialize the authentication service.

        Args:
            db: Async database session.
            jwt_manager: JWT token manager.
            hasher: Password hasher. Defaults to bcrypt with 10 rounds.
        """
        self._db = db
        self._jwt_manager = jwt_manager
        self._hasher = hasher or PasswordHasher()

    async def authenticate(self, username: str | None, password: str | None) -> AuthResult:
        """Check credentials and issue a session token.

        Hashes created with a different bcrypt cost are upgraded on
        successful login.

        Args:
            username: Login name.
            password: Plain text password.

        Returns:
            AuthResult with the user row and the signed token.

        Raises:
            ValidationError: If either credential is missing.
            InvalidCredentialsError: If the user does not exist or the
                password does not match.
        """
        if not username or not password:
            raise ValidationError("Username and password are required")

        result = await self._db.execute(select(User).where(User.username == username.strip()))
        user = result.scalar_one_or_none()

        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.info("Login rejected for username=%s", username)
            raise InvalidCredentialsError()

        if self._hasher.needs_rehash(user.password_hash):
            user.password_hash = self._hasher.hash(password)
            await self._db.commit()
            logger.info("Password hash upgraded for user %s", user.id)

        token = self._jwt_manager.issue(self.claims_for(user))
        logger.info("User logged in: %s", user.id)

        return AuthResult(user=user, token=token)

    @staticmethod
    def claims_for(user: User) -> SessionClaims:
        """Build token claims from a user row."""
        return SessionClaims(
            user_id=user.id,
            username=user.username,
            email=user.email,
            role=Role(user.role),
            permissions=user.permission_set,
        )
