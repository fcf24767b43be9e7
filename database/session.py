"""
Async SQLAlchemy engine and session factory.

``Database`` is built once by ``main.create_app`` and kept on
``app.state.db``; route dependencies reach it through the request.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import func, select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from database.models import DEFAULT_CATEGORIES, Base, Category

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, url: str, *, echo: bool = False, **engine_kwargs: Any) -> None:
        if make_url(url).get_backend_name() != "sqlite":
            engine_kwargs.setdefault("pool_size", 10)
            engine_kwargs.setdefault("max_overflow", 20)
            engine_kwargs.setdefault("pool_recycle", 3600)
        self.engine = create_async_engine(url, echo=echo, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session that commits on success and rolls back on error."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready")

    async def seed_categories(self) -> int:
        """Insert the default categories when the table is empty."""
        async with self.session_factory() as session:
            count = await session.scalar(select(func.count()).select_from(Category))
            if count:
                return 0
            session.add_all(Category(**row) for row in DEFAULT_CATEGORIES)
            await session.commit()
        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)

    async def dispose(self) -> None:
        await self.engine.dispose()
