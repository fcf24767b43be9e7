"""
Tests for the bcrypt password hasher.
"""

import pytest

from auth.errors import HashingError
from auth.password import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


class TestPasswordHasher:
    def test_hash_then_verify(self, hasher):
        digest = hasher.hash("secret1")
        assert hasher.verify(digest, "secret1") is True

    def test_wrong_password_is_false_not_error(self, hasher):
        digest = hasher.hash("secret1")
        assert hasher.verify(digest, "secret2") is False

    def test_digest_is_salted_and_self_contained(self, hasher):
        first = hasher.hash("secret1")
        second = hasher.hash("secret1")
        assert first != second
        assert first.startswith("$2b$04$")
        assert "secret1" not in first

    def test_malformed_digest_raises(self, hasher):
        with pytest.raises(HashingError):
            hasher.verify("not-a-bcrypt-hash", "secret1")

    def test_overlong_password_never_matches(self, hasher):
        digest = hasher.hash("a" * 72)
        assert hasher.verify(digest, "a" * 73) is False

    def test_dummy_hash_is_cached(self, hasher):
        assert hasher.dummy_hash is hasher.dummy_hash
        assert hasher.verify(hasher.dummy_hash, "secret1") is False
