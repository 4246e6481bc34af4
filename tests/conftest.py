"""Shared pytest fixtures configured to use SQLite in-memory for tests."""

import logging
import os
from datetime import datetime, timedelta, timezone

# settings are cached on first import; pin the test environment before that
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENCRYPTION_SECRET_KEY"] = "test-encryption-secret"
os.environ["LOG_TO_FILE"] = "false"
os.environ["CLEANUP_ENABLED"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from noteguard.api.dependencies import get_cipher, get_cleanup_scheduler, get_clock  # noqa: E402
from noteguard.core.models import BaseModel, User, UserRole  # noqa: E402
from noteguard.core.services import Actor, CleanupScheduler, NoteService  # noqa: E402
from noteguard.database import build_engine, get_db_session  # noqa: E402
from noteguard.main import app  # noqa: E402
from noteguard.security.cipher import CipherService  # noqa: E402
from noteguard.security.jwt import create_access_token  # noqa: E402
from noteguard.security.password import hash_password  # noqa: E402

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_PASSWORD = "TestPassword123!"
START = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Clock callable that only moves when told to."""

    def __init__(self, now: datetime = START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def cipher():
    return CipherService("test-encryption-secret")


async def create_user(session: AsyncSession, username: str, role: UserRole = UserRole.USER) -> User:
    user = User(username=username, password_hash=hash_password(TEST_PASSWORD), role=role.value)
    session.add(user)
    await session.commit()
    return user


@pytest.fixture
async def owner(test_session):
    return await create_user(test_session, "owner")


@pytest.fixture
async def other_user(test_session):
    return await create_user(test_session, "stranger")


@pytest.fixture
async def admin_user(test_session):
    return await create_user(test_session, "admin", role=UserRole.ADMIN)


@pytest.fixture
def owner_actor(owner):
    return Actor.from_user(owner)


@pytest.fixture
def other_actor(other_user):
    return Actor.from_user(other_user)


@pytest.fixture
def admin_actor(admin_user):
    return Actor.from_user(admin_user)


@pytest.fixture
def note_service(test_session, cipher, clock):
    return NoteService(test_session, cipher, clock=clock)


@pytest.fixture
def scheduler(session_factory, clock):
    return CleanupScheduler(session_factory, interval_seconds=3600, clock=clock)


def auth_headers_for(user: User) -> dict[str, str]:
    token = create_access_token({"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def async_client(session_factory, cipher, clock, scheduler):
    """HTTP client against the real app, wired to the test database and clock."""

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_get_db
    app.dependency_overrides[get_cipher] = lambda: cipher
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_cleanup_scheduler] = lambda: scheduler

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(test_session):
    async def _make(username: str, role: UserRole = UserRole.USER) -> User:
        return await create_user(test_session, username, role)

    return _make


@pytest.fixture
def headers_for():
    return auth_headers_for
