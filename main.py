"""
Expense Tracker API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_exception_handlers, register_middleware
from api.routes import protected_router, router as api_router
from auth.dependencies import AuthComponents
from auth.jwt import TokenService
from auth.password import PasswordHasher
from auth.routes import router as auth_router, user_router
from config.settings import Settings, get_settings
from database.session import Database

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or get_settings()
    database = database or Database(settings.database_url, echo=settings.database_echo)

    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set; registration and login will fail until it is configured.")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.auto_migrate:
            await database.create_all()
            await database.seed_categories()
        logger.info("Endpoints: POST %s/auth/register, POST %s/auth/login, GET %s/user/profile (protected)",
                    settings.api_prefix, settings.api_prefix, settings.api_prefix)
        logger.info("Application ready to accept requests.")
        yield
        await database.dispose()

    app = FastAPI(
        title="Expense Tracker API",
        version="1.0.0",
        description="Personal finance tracking backend.",
        lifespan=lifespan,
    )

    app.state.db = database
    app.state.auth = AuthComponents(
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
        tokens=TokenService(settings.jwt_secret, ttl_seconds=settings.jwt_expiry_seconds),
        password_min_length=settings.password_min_length,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["Origin", "Content-Type", "Authorization"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(api_router)
    app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth")
    app.include_router(user_router, prefix=f"{settings.api_prefix}/user")
    app.include_router(protected_router, prefix=settings.api_prefix)

    return app


if __name__ == "__main__":
    config = get_settings()
    configure_logging(config.debug)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )
