"""
JWT token creation and verification.

Tokens are HS256-signed JWTs carrying ``user_id``, ``email``, ``iat`` and
``exp``.  The secret comes from ``Settings.jwt_secret`` and is handed to
``TokenService`` once at startup.

Expiry is decided by ``TokenService.validate`` against the service clock.
PyJWT's own ``exp``/``iat`` checks are switched off so the two can never
disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

import jwt

from auth.errors import Expired, InvalidSignature, Malformed, SigningError

ALGORITHM = "HS256"
DEFAULT_TTL_SECONDS = 24 * 60 * 60

_DECODE_OPTIONS = {
    "verify_signature": True,
    "verify_exp": False,
    "verify_iat": False,
    "verify_nbf": False,
    "require": ["user_id", "email", "iat", "exp"],
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenClaims:
    user_id: str
    email: str


class TokenService:
    def __init__(
        self,
        secret: str,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def __repr__(self) -> str:
        return f"TokenService(ttl_seconds={self.ttl_seconds})"

    def issue(self, user_id: str, email: str) -> str:
        """Create a signed token for ``user_id`` that expires ``ttl_seconds`` from now."""
        if not self._secret:
            raise SigningError("JWT secret is not configured")
        issued_at = int(self._clock().timestamp())
        payload = {
            "user_id": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=ALGORITHM)
        except jwt.PyJWTError as exc:
            raise SigningError(str(exc)) from exc

    def validate(self, token: str) -> TokenClaims:
        """
        Verify ``token`` and return its claims.

        Raises ``InvalidSignature``, ``Malformed`` or ``Expired``.
        """
        if not self._secret:
            raise InvalidSignature("JWT secret is not configured")
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options=_DECODE_OPTIONS,
            )
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignature(str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise Malformed(str(exc)) from exc

        user_id, email, expires_at = payload["user_id"], payload["email"], payload["exp"]
        if not isinstance(user_id, str) or not isinstance(email, str):
            raise Malformed("user_id and email must be strings")
        if not isinstance(expires_at, (int, float)) or isinstance(expires_at, bool):
            raise Malformed("exp must be a number")

        if expires_at <= self._clock().timestamp():
            raise Expired("token expired")

        return TokenClaims(user_id=user_id, email=email)
