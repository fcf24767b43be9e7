"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic
salting and configurable work factor.
"""

from __future__ import annotations

import secrets

import bcrypt

from auth.errors import HashingError

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds
        self._dummy_hash: str | None = None

    @property
    def dummy_hash(self) -> str:
        """A digest at the configured cost that no real password is checked against."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hash(secrets.token_urlsafe(16))
        return self._dummy_hash

    def hash(self, password: str) -> str:
        """Hash a password with bcrypt (auto-salted, ``rounds`` work factor)."""
        try:
            return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()
        except (ValueError, OSError) as exc:
            raise HashingError(str(exc)) from exc

    def verify(self, password_hash: str, password: str) -> bool:
        """
        Constant-time comparison against a bcrypt hash.

        Returns ``False`` on mismatch; raises ``HashingError`` only when
        ``password_hash`` is not a bcrypt digest.
        """
        raw = password.encode()
        if len(raw) > MAX_PASSWORD_BYTES:
            # Registration refuses such passwords, so nothing stored can match.
            return False
        try:
            return bcrypt.checkpw(raw, password_hash.encode())
        except (ValueError, TypeError) as exc:
            raise HashingError("Unparseable password hash") from exc
