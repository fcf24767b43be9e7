"""
Account flow — register, login and profile lookup.

Storage, hashing and signing failures all surface as ``InternalError``;
unknown email and wrong password share one ``InvalidCredentials`` message.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from auth.errors import (
    DuplicateAccount,
    HashingError,
    InternalError,
    InvalidCredentials,
    NotFound,
    SigningError,
    ValidationError,
)
from auth.jwt import TokenService
from auth.password import MAX_PASSWORD_BYTES, PasswordHasher
from database.repository import UserRepository

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_NAME_LENGTH = 128
MAX_EMAIL_LENGTH = 255


@dataclass(frozen=True)
class UserSummary:
    id: str
    name: str
    email: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: UserSummary


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _summary(user: Any) -> UserSummary:
    return UserSummary(id=str(user.user_id), name=user.display_name, email=user.email)


class AccountService:
    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        password_min_length: int = 6,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        self.password_min_length = password_min_length

    def _validate_registration(self, name: str, email: str, password: str) -> None:
        if not name:
            raise ValidationError("Name is required")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(f"Name must be at most {MAX_NAME_LENGTH} characters")
        if len(email) > MAX_EMAIL_LENGTH or not _EMAIL_RE.match(email):
            raise ValidationError("A valid email address is required")
        if len(password) < self.password_min_length:
            raise ValidationError(
                f"Password must be at least {self.password_min_length} characters"
            )
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    def _verify_dummy(self, password: str) -> None:
        self.hasher.verify(self.hasher.dummy_hash, password)

    def _issue(self, user: Any) -> str:
        try:
            return self.tokens.issue(str(user.user_id), user.email)
        except SigningError as exc:
            logger.error("Token signing failed: %s", exc)
            raise InternalError("Failed to generate token") from exc

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        """Create an account and return a token for it."""
        name = name.strip()
        email = normalize_email(email)
        self._validate_registration(name, email, password)

        try:
            if await self.users.get_active_by_email(email) is not None:
                raise DuplicateAccount()
        except SQLAlchemyError as exc:
            logger.exception("User lookup failed during registration")
            raise InternalError("Failed to create user") from exc

        try:
            password_hash = await asyncio.to_thread(self.hasher.hash, password)
        except HashingError as exc:
            logger.error("Password hashing failed: %s", exc)
            raise InternalError("Failed to hash password") from exc

        try:
            user = await self.users.add(email, name, password_hash)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same email.
            raise DuplicateAccount() from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to persist new user")
            raise InternalError("Failed to create user") from exc

        token = self._issue(user)
        try:
            await self.users.commit()
        except SQLAlchemyError as exc:
            logger.exception("Failed to commit new user")
            raise InternalError("Failed to create user") from exc

        logger.info("Registered user %s", user.user_id)
        return AuthResult(token=token, user=_summary(user))

    async def login(self, email: str, password: str) -> AuthResult:
        """Check credentials and return a fresh token."""
        email = normalize_email(email)
        try:
            user = await self.users.get_active_by_email(email)
        except SQLAlchemyError as exc:
            logger.exception("User lookup failed during login")
            raise InternalError() from exc

        try:
            if user is None:
                # Same bcrypt cost as a real check so timing does not reveal the miss.
                await asyncio.to_thread(self._verify_dummy, password)
                matched = False
            else:
                matched = await asyncio.to_thread(self.hasher.verify, user.password_hash, password)
        except HashingError as exc:
            logger.error("Stored password hash is unreadable: %s", exc)
            raise InternalError() from exc

        if not matched:
            logger.info("Rejected login attempt")
            raise InvalidCredentials()

        token = self._issue(user)
        logger.info("Login: %s", user.user_id)
        return AuthResult(token=token, user=_summary(user))

    async def get_profile(self, identity: Identity) -> UserSummary:
        try:
            user = await self.users.get_active_by_id(identity.user_id)
        except SQLAlchemyError as exc:
            logger.exception("User lookup failed for profile")
            raise InternalError() from exc
        if user is None:
            raise NotFound()
        return _summary(user)
