"""Pytest configuration and fixtures."""

import os

# Keep tests off the real database file and media directory
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STORAGE_BACKEND", "memory")

import pytest
from typing import AsyncGenerator, Awaitable, Callable
from httpx import AsyncClient, ASGITransport

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from asxphoto.app.api.dependencies import get_storage
from asxphoto.app.core.security import create_access_token
from asxphoto.app.db.base import Base, get_db
from asxphoto.app.main import app
from asxphoto.app.models.user import User
from asxphoto.app.services.accounts import AccountService
from asxphoto.app.services.storage import InMemoryStorageClient

# 1x1 transparent PNG
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06"
    b"\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01"
    b"\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


@pytest.fixture(scope="function")
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """
    Create a fresh in-memory database with all tables.

    StaticPool keeps every session on the same connection, and so on the
    same in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    await engine.dispose()


@pytest.fixture(scope="function")
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Database session for service-level tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage() -> InMemoryStorageClient:
    """In-memory object storage."""
    return InMemoryStorageClient()


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES


@pytest.fixture
def make_user(test_db) -> Callable[..., Awaitable[User]]:
    """Factory creating users with unique callsigns."""
    counter = {"n": 0}

    async def _make_user(is_staff: bool = False, **overrides) -> User:
        counter["n"] += 1
        n = counter["n"]
        fields = {
            "email": f"pilot{n}@example.com",
            "callsign": f"ASX{n:03d}",
            "first_name": "Pilot",
            "last_name": f"Number{n}",
            "password": "secret123",
            "is_staff": is_staff,
        }
        fields.update(overrides)
        return await AccountService(test_db).create_user(**fields)

    return _make_user


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Build bearer headers for a user."""

    def _auth_headers(user: User) -> dict[str, str]:
        token, _ = create_access_token(user.id, staff=user.is_staff)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture(scope="function")
async def test_client_with_db(session_factory, storage) -> AsyncGenerator[AsyncClient, None]:
    """
    Create test client with in-memory database and storage.

    Overrides the app's database and storage dependencies.
    """

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Cleanup
    app.dependency_overrides.clear()
