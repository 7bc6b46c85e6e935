# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for password hashing utilities.

Tests the PasswordHasher class.
"""

import pytest

from clientdesk.domains.auth.password import PasswordHasher


@pytest.fixture
def hasher() -> PasswordHasher:
    """Create a low-cost hasher for speed."""
    return PasswordHasher(rounds=4)


class TestPasswordHasher:
    """Tests for PasswordHasher class."""

    def test_hash_password_returns_bcrypt_hash(self, hasher: PasswordHasher) -> None:
        """Test that hashing returns a bcrypt hash string."""
        hashed = hasher.hash("test_password_123")

        assert hashed.startswith("$2b$04$")
        assert len(hashed) == 60

    def test_hash_produces_different_hashes_for_same_password(self, hasher: PasswordHasher) -> None:
        """Test that hashing the same password produces different hashes (due to salt)."""
        assert hasher.hash("same-password") != hasher.hash("same-password")

    def test_hash_empty_password_raises(self, hasher: PasswordHasher) -> None:
        """Test that empty passwords are refused."""
        with pytest.raises(ValueError):
            hasher.hash("")

    def test_verify_correct_password(self, hasher: PasswordHasher) -> None:
        """Test that the original password verifies."""
        hashed = hasher.hash("correct horse")

        assert hasher.verify("correct horse", hashed) is True

    def test_verify_wrong_password(self, hasher: PasswordHasher) -> None:
        """Test that another password does not verify."""
        hashed = hasher.hash("correct horse")

        assert hasher.verify("battery staple", hashed) is False

    def test_verify_plaintext_legacy_value_returns_false(self, hasher: PasswordHasher) -> None:
        """Test that a stored plaintext value never matches, even if equal."""
        assert hasher.verify("secret", "secret") is False

    @pytest.mark.parametrize("password,stored", [("", "$2b$04$abc"), ("secret", "")])
    def test_verify_empty_values_return_false(
        self,
        hasher: PasswordHasher,
        password: str,
        stored: str,
    ) -> None:
        """Test that empty input never verifies."""
        assert hasher.verify(password, stored) is False

    def test_needs_rehash_detects_other_cost(self, hasher: PasswordHasher) -> None:
        """Test that hashes with another cost factor need rehashing."""
        other = PasswordHasher(rounds=5).hash("pw")

        assert hasher.needs_rehash(other) is True
        assert hasher.needs_rehash(hasher.hash("pw")) is False

    def test_needs_rehash_for_non_bcrypt_value(self, hasher: PasswordHasher) -> None:
        """Test that unparseable values need rehashing."""
        assert hasher.needs_rehash("plaintext") is True
