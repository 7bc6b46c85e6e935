# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Password hashing utilities using bcrypt.

Stored credentials are bcrypt hashes. Values that are not bcrypt hashes
(legacy plaintext rows) never verify; such accounts must have their
password reset.

Example:
    >>> hasher = PasswordHasher()
    >>> hashed = hasher.hash("my_password")
    >>> hasher.verify("my_password", hashed)
    True
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class PasswordHasher:
    """bcrypt hashing with a configurable cost factor.

    Attributes:
        _rounds: bcrypt cost factor used for new hashes.
    """

    def __init__(self, rounds: int = 10) -> None:
        """Initialize the password hasher.

        Args:
            rounds: bcrypt cost factor.
        """
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password.

        Args:
            password: Plain text password.

        Returns:
            bcrypt hash string with the salt embedded.

        Raises:
            ValueError: If password is empty.
        """
        if not password:
            raise ValueError("Password cannot be empty")

        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a stored hash.

        Args:
            password: Plain text password.
            password_hash: Stored bcrypt hash.

        Returns:
            True if the password matches, False otherwise (including
            when the stored value is not a bcrypt hash).
        """
        if not password or not password_hash:
            return False

        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except ValueError:
            logger.warning("Stored password is not a bcrypt hash")
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """Check whether a hash was produced with a different cost factor.

        Args:
            password_hash: Stored bcrypt hash ("$2b$<rounds>$...").

        Returns:
            True if the hash should be regenerated on next login.
        """
        parts = password_hash.split("$")
        if len(parts) < 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) != self._rounds
