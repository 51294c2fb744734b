"""Test fixtures — a fresh app and database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test builds its own app from test Settings (create_app(settings)),
   so the engine, token secret and bcrypt cost are per-test.
2. The schema is created before the test and dropped after it.
3. By default the database is in-memory SQLite (aiosqlite); set
   TODOLIST_TEST_DATABASE_URL to run the suite against PostgreSQL.

Requests go through httpx's ASGITransport — no server, real middleware,
real auth pipeline.
"""

import os
import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from todolist.config import Settings
from todolist.db.models import Base
from todolist.main import create_app

TEST_DB_URL = os.environ.get(
    "TODOLIST_TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:"
)
TEST_JWT_SECRET = "test-secret-do-not-use"
DEFAULT_PASSWORD = "secret12"


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": TEST_DB_URL,
        "jwt_secret": TEST_JWT_SECRET,
        "bcrypt_rounds": 4,  # bcrypt minimum
        "environment": "test",
    }
    values.update(overrides)
    return Settings(**values)


@pytest_asyncio.fixture()
async def app():
    """App wired to a freshly created schema."""
    application = create_app(make_settings())
    engine = application.state.context.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield application

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register_user(client, login=None, password=DEFAULT_PASSWORD) -> dict:
    """Register a user through the API; returns id, login, token and auth headers."""
    login = login or f"user-{uuid.uuid4().hex[:8]}"
    r = await client.post("/auth/register", json={"login": login, "password": password})
    assert r.status_code == 200, r.text
    data = r.json()
    return {
        "id": data["user"]["id"],
        "login": login,
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


@pytest_asyncio.fixture()
async def alice(client):
    return await register_user(client, "alice")


@pytest_asyncio.fixture()
async def bob(client):
    return await register_user(client, "bob")


@pytest_asyncio.fixture()
async def carol(client):
    return await register_user(client, "carol")


@pytest_asyncio.fixture()
async def groceries(client, alice):
    """A list created by alice."""
    r = await client.post("/list", json={"title": "Groceries"}, headers=alice["headers"])
    assert r.status_code == 200, r.text
    return r.json()["message"]


@pytest_asyncio.fixture()
async def make_user(client):
    """Factory fixture: `await make_user("dave")` registers another user."""
    async def _make(login=None, password=DEFAULT_PASSWORD):
        return await register_user(client, login, password)
    return _make


@pytest_asyncio.fixture()
async def jwt_secret(app):
    return app.state.context.settings.jwt_secret
