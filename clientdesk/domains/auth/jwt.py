# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""JWT session token management.

This module issues and verifies the signed session tokens carried in the
auth cookie, using python-jose. Tokens are stateless: validity depends
only on the signature and the expiry claim, there is no revocation list.

Example:
    >>> from clientdesk.core.config import get_settings
    >>> jwt_manager = JWTManager(get_settings().jwt)
    >>> token = jwt_manager.issue(claims)
    >>> claims = jwt_manager.verify(token)
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import ExpiredSignatureError, JWTError as JoseJWTError, jwt
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from clientdesk.core.config.settings import JWTSettings
from clientdesk.core.errors import UnauthenticatedError
from clientdesk.domains.auth.permissions import PermissionSet, Role

logger = logging.getLogger(__name__)


class SessionClaims(BaseModel):
    """Identity and authorization claims embedded in a session token.

    Attributes:
        user_id: User identifier.
        username: Unique username.
        email: E-mail address, if known.
        role: User role.
        permissions: Capability flags.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    username: str
    email: str | None = None
    role: Role = Role.TEAM_MEMBER
    permissions: PermissionSet = Field(default_factory=PermissionSet)


class TokenClaims(SessionClaims):
    """Claims returned by a successful verification.

    Attributes:
        exp: Expiration timestamp.
        iat: Issued at timestamp.
        jti: Token identifier.
    """

    exp: int
    iat: int
    jti: str


class JWTError(UnauthenticatedError):
    """Base exception for JWT operations.

    Maps to 401 if it ever reaches the exception handlers; the auth
    middleware normally turns it into an anonymous request.
    """

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is malformed, badly signed or expired."""

    pass


class TokenExpiredError(InvalidTokenError):
    """Raised when a token has expired."""

    pass


class JWTManager:
    """Session token issuer and verifier.

    Attributes:
        _settings: JWT configuration settings.

    Example:
        >>> jwt_manager = JWTManager(settings)
        >>> token = jwt_manager.issue(SessionClaims(user_id="u1", username="alice"))
        >>> jwt_manager.verify(token).username
        'alice'
    """

    def __init__(self, settings: JWTSettings) -> None:
        """Initialize the JWT manager.

        Args:
            settings: JWT configuration settings.
        """
        self._settings = settings

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self._settings.expire_hours * 60 * 60

    def issue(self, claims: SessionClaims, expires_in: int | None = None) -> str:
        """Create a signed token embedding the claims.

        Args:
            claims: Identity claims to embed.
            expires_in: Lifetime override in seconds.

        Returns:
            Compact JWT string.
        """
        now = datetime.now(timezone.utc)
        lifetime = self.expires_in if expires_in is None else expires_in
        exp = now + timedelta(seconds=lifetime)

        payload: dict[str, Any] = {
            "userId": claims.user_id,
            "username": claims.username,
            "email": claims.email,
            "role": claims.role.value,
            "permissions": claims.permissions.to_claims(),
            "exp": int(exp.timestamp()),
            "iat": int(now.timestamp()),
            "jti": secrets.token_urlsafe(16),
        }

        return jwt.encode(
            payload,
            self._settings.secret_key.get_secret_value(),
            algorithm=self._settings.algorithm,
        )

    def verify(self, token: str) -> TokenClaims:
        """Decode and validate a token.

        Tokens issued before role and permission claims existed resolve
        to the team_member role and its default permissions.

        Args:
            token: JWT string.

        Returns:
            TokenClaims with the decoded claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is malformed or badly signed.
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key.get_secret_value(),
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except JoseJWTError as e:
            logger.debug("Token decode failed: %s", str(e))
            raise InvalidTokenError(f"Invalid token: {str(e)}")

        try:
            role = Role(payload.get("role") or Role.TEAM_MEMBER.value)
            return TokenClaims(
                user_id=payload["userId"],
                username=payload["username"],
                email=payload.get("email"),
                role=role,
                permissions=PermissionSet.from_claims(payload.get("permissions"), role),
                exp=payload["exp"],
                iat=payload.get("iat", payload["exp"] - self.expires_in),
                jti=payload.get("jti", ""),
            )
        except (KeyError, ValueError, PydanticValidationError) as e:
            logger.debug("Token claims rejected: %s", str(e))
            raise InvalidTokenError(f"Invalid token claims: {str(e)}")
