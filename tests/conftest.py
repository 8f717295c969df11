"""
Shared fixtures.

Everything runs against in-memory SQLite with a low bcrypt cost, so no
PostgreSQL server is needed.
"""

import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Settings
from core.security import PasswordHasher, TokenCodec
from db import build_engine, build_session_factory, create_tables

SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def settings():
    return Settings(jwt_secret=SECRET, database_url="sqlite://", bcrypt_rounds=4)


@pytest.fixture
def codec():
    return TokenCodec(SECRET)


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def db_session():
    engine = build_engine("sqlite://")
    create_tables(engine)
    session = build_session_factory(engine)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def register_user(client):
    """Registers a user and returns (auth json, headers)."""

    def _register(email="alice@example.com", password="secret123", full_name="Alice"):
        resp = client.post(
            "/auth/register",
            json={"email": email, "password": password, "fullName": full_name},
        )
        assert resp.status_code == 201, resp.text
        data = resp.json()
        return data, {"Authorization": f"Bearer {data['token']}"}

    return _register
