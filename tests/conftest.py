"""Pytest configuration and fixtures for socialhub.

Uses app.main:app for HTTP tests and app.infrastructure.persistence.database
for DB-dependent fixtures. All imports use app.*.

Tests run against a throwaway SQLite file (aiosqlite); the schema is
recreated for every test and the engine is disposed afterwards so each
test's event loop gets fresh connections.
"""

import os
import tempfile
from typing import NamedTuple

_TEST_DB_DIR = tempfile.mkdtemp(prefix="socialhub-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-do-not-use-in-production")
os.environ.setdefault("MAIL_BACKEND", "log")
os.environ.setdefault("REDIS_ENABLED", "false")

import pytest
import redis.asyncio as redis
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.v1.dependencies import get_mailer
from app.domain.exceptions import MailDeliveryException
from app.infrastructure.persistence import database
from app.infrastructure.persistence import models  # noqa: F401
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.main import app

TEST_PASSWORD = "correct-horse-battery"


class RecordingMailer:
    """IMailer test double: records messages, optionally fails every send."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[tuple[str, str, str]] = []

    async def send(self, to_email: str, subject: str, body: str) -> None:
        if self.fail:
            raise MailDeliveryException(reason="test")
        self.sent.append((to_email, subject, body))


class FakeClock:
    """Monotonic clock the tests can advance by hand."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRedis:
    """In-memory subset of redis.asyncio.Redis used by CacheService (get/setex/delete/ping)."""

    def __init__(self, clock: FakeClock | None = None, *, broken: bool = False) -> None:
        self.clock = clock or FakeClock()
        self.broken = broken
        self.store: dict[str, tuple[str, float]] = {}

    def _check(self) -> None:
        if self.broken:
            raise redis.ConnectionError("connection refused")

    async def ping(self) -> bool:
        self._check()
        return True

    async def get(self, key: str) -> str | None:
        self._check()
        entry = self.store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self.clock() >= expires_at:
            del self.store[key]
            return None
        return value

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        self._check()
        self.store[key] = (value, self.clock() + ttl)
        return True

    async def delete(self, key: str) -> int:
        self._check()
        return 1 if self.store.pop(key, None) is not None else 0

    async def aclose(self) -> None:
        return None


@pytest.fixture
async def session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory over a freshly created schema with the built-in roles.

    Disposes the engine after the test.
    """
    factory = database.get_session_factory()
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.drop_all)
        await conn.run_sync(database.Base.metadata.create_all)
    async with factory() as session, session.begin():
        await RoleRepository(session).ensure_defaults()
    yield factory
    await database.dispose_engine()


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Single session for repository tests. Rolls back after test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
async def client(session_factory, mailer: RecordingMailer) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with a recording mailer."""
    app.dependency_overrides[get_mailer] = lambda: mailer
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class AuthUser(NamedTuple):
    """An active user created through the API."""

    user_id: str
    headers: dict[str, str]


async def register_and_activate(
    client: AsyncClient, username: str, email: str, password: str = TEST_PASSWORD
) -> AuthUser:
    """Register, activate and log in a user via the API."""
    resp = await client.post(
        "/api/v1/authentication/user",
        json={"username": username, "email": email, "password": password},
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    activate = await client.put(f"/api/v1/users/activate/{data['token']}")
    assert activate.status_code == 204, activate.text
    login = await client.post(
        "/api/v1/authentication/token",
        json={"email": email, "password": password},
    )
    assert login.status_code == 201, login.text
    return AuthUser(
        user_id=data["user_id"],
        headers={"Authorization": f"Bearer {login.json()['access_token']}"},
    )


@pytest.fixture
async def alice(client: AsyncClient) -> AuthUser:
    """Active, logged-in user 'alice'."""
    return await register_and_activate(client, "alice", "alice@example.com")
