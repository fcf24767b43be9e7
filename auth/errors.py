"""
Error taxonomy for the authentication flow.

``AuthError`` subclasses carry the HTTP status they map to and a short
client-safe message; ``api.middleware`` turns them into ``{"error": ...}``
responses.  ``TokenError`` and ``HashingError`` are internal: they never
reach a client directly and are collapsed by the gate or the account flow.
"""

from __future__ import annotations

from fastapi import status


class AuthError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class DuplicateAccount(AuthError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Email already registered"


class InvalidCredentials(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class Unauthenticated(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class MalformedCredential(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token format"


class NotFound(AuthError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class InternalError(AuthError):
    pass


# ── Internal (never client-visible) ──────────────────────────────────────


class TokenError(Exception):
    """Base for token validation/signing failures."""


class Expired(TokenError):
    pass


class InvalidSignature(TokenError):
    pass


class Malformed(TokenError):
    pass


class SigningError(TokenError):
    pass


class HashingError(Exception):
    """bcrypt could not produce or parse a digest."""
