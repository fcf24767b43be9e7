"""
Shared pytest fixtures: settings pointing at a throwaway SQLite file and an
in-process ``TestClient``.
"""

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app

TEST_SECRET = "test-secret-key-for-testing-only-0123456789"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        api_prefix="/api/v1",
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def register(client, name="Ana", email="ana@x.com", password="secret1"):
    return client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": password},
    )


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
