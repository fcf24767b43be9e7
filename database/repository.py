"""
User record store: lookups that ignore soft-deleted rows.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User


def _to_uuid(value: str | uuid.UUID) -> uuid.UUID:
    return uuid.UUID(value) if isinstance(value, str) else value


class UserRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_active_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.email == email, User.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    async def get_active_by_id(self, user_id: str | uuid.UUID) -> Optional[User]:
        try:
            uid = _to_uuid(user_id)
        except ValueError:
            return None
        result = await self.session.execute(
            select(User).where(User.user_id == uid, User.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    async def add(self, email: str, display_name: str, password_hash: str) -> User:
        """Insert a user and flush so the unique index is checked now."""
        user = User(
            user_id=uuid.uuid4(),
            email=email,
            display_name=display_name,
            password_hash=password_hash,
        )
        self.session.add(user)
        await self.session.flush()
        return user

    async def commit(self) -> None:
        await self.session.commit()

    async def soft_delete(self, user_id: str | uuid.UUID) -> bool:
        result = await self.session.execute(
            update(User)
            .where(User.user_id == _to_uuid(user_id), User.deleted_at.is_(None))
            .values(deleted_at=datetime.now(timezone.utc))
        )
        return result.rowcount > 0
