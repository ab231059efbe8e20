"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Point Settings at the test database before any app module is imported.
# In-memory SQLite by default; set TEST_DATABASE_URL to run against Postgres.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")
TEST_API_TOKEN = "test-api-token"

os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["API_TOKEN"] = TEST_API_TOKEN
os.environ["ENVIRONMENT"] = "test"

from models.base import Base  # noqa: E402
from models.bookmark import Bookmark  # noqa: E402


def make_bookmarks() -> list[Bookmark]:
    """Four well-formed bookmarks, in insertion order."""
    return [
        Bookmark(
            title="Bookmark one",
            url="https://bookmarkone.com",
            description="This is bookmark one",
            rating=5,
        ),
        Bookmark(
            title="Bookmark Two",
            url="https://bookmarktwo.com",
            description="This is bookmark Two",
            rating=4,
        ),
        Bookmark(
            title="Bookmark Three",
            url="https://bookmarkthree.com",
            description="This is bookmark three",
            rating=3,
        ),
        Bookmark(
            title="Bookmark Four",
            url="https://bookmarkfour.com",
            description="This is bookmark four",
            rating=5,
        ),
    ]


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """
    Create an async engine with a fresh schema for each test.

    In-memory SQLite lives only as long as its connection, so StaticPool keeps
    a single shared connection for the whole test.
    """
    engine_kwargs = {"poolclass": StaticPool} if TEST_DATABASE_URL.startswith("sqlite") else {}
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, **engine_kwargs)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Async session shared by the test body and every request it makes."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded_bookmarks(db_session: AsyncSession) -> list[Bookmark]:
    """Insert the standard bookmarks and return them with their ids."""
    bookmarks = make_bookmarks()
    db_session.add_all(bookmarks)
    await db_session.flush()
    for bookmark in bookmarks:
        await db_session.refresh(bookmark)
    return bookmarks


async def _make_client(
    db_session: AsyncSession,
    headers: dict[str, str] | None = None,
    raise_app_exceptions: bool = True,
) -> AsyncGenerator[AsyncClient]:
    """Build a test client whose requests all use the test session."""
    # Clear the settings cache so it picks up the test environment
    from core.config import get_settings

    get_settings.cache_clear()

    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions),
        base_url="http://test",
        headers=headers,
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient]:
    """Client sending the configured bearer token."""
    async for test_client in _make_client(
        db_session, headers={"Authorization": f"Bearer {TEST_API_TOKEN}"},
    ):
        yield test_client


@pytest.fixture
async def anonymous_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient]:
    """Client sending no Authorization header."""
    async for test_client in _make_client(db_session):
        yield test_client


@pytest.fixture
async def error_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient]:
    """
    Authenticated client that returns 500 responses instead of raising.

    Starlette re-raises unhandled exceptions after the error handler has sent
    its response; this lets tests inspect that response.
    """
    async for test_client in _make_client(
        db_session,
        headers={"Authorization": f"Bearer {TEST_API_TOKEN}"},
        raise_app_exceptions=False,
    ):
        yield test_client
