"""
FastAPI dependencies for authentication.

Provides ``db_session``, ``get_account_service`` and the ``require_identity``
gate used by every protected route.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth.errors import MalformedCredential, TokenError, Unauthenticated
from auth.jwt import TokenService
from auth.password import PasswordHasher
from auth.service import AccountService, Identity
from database.repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthComponents:
    """Process-wide auth collaborators, built once in ``create_app``."""

    hasher: PasswordHasher
    tokens: TokenService
    password_min_length: int = 6


@dataclass
class RequestContext:
    """Per-request state shared between the gate and route handlers."""

    identity: Optional[Identity] = None


def get_request_context(request: Request) -> RequestContext:
    context = getattr(request.state, "context", None)
    if context is None:
        context = RequestContext()
        request.state.context = context
    return context


def current_identity(context: RequestContext = Depends(get_request_context)) -> Identity:
    """Identity attached by ``require_identity``; the route must be gated."""
    if context.identity is None:
        raise Unauthenticated()
    return context.identity


def get_auth_components(request: Request) -> AuthComponents:
    return request.app.state.auth


async def db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    async with request.app.state.db.session() as session:
        yield session


def get_account_service(
    session: AsyncSession = Depends(db_session),
    components: AuthComponents = Depends(get_auth_components),
) -> AccountService:
    return AccountService(
        UserRepository(session),
        components.hasher,
        components.tokens,
        password_min_length=components.password_min_length,
    )


def parse_bearer(authorization: Optional[str]) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        raise Unauthenticated("No authorization header")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise MalformedCredential()
    return parts[1]


async def require_identity(
    request: Request,
    authorization: Optional[str] = Header(None),
    components: AuthComponents = Depends(get_auth_components),
) -> Identity:
    """
    Verify the Bearer token and attach the caller's identity to the
    request context.  Every token failure is reported as the same 401.
    """
    token = parse_bearer(authorization)
    try:
        claims = components.tokens.validate(token)
    except TokenError as exc:
        logger.info("Token rejected on %s: %s", request.url.path, type(exc).__name__)
        raise Unauthenticated() from exc

    identity = Identity(user_id=claims.user_id, email=claims.email)
    get_request_context(request).identity = identity
    return identity
