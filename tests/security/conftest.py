"""
Security test fixtures.

These fixtures enable testing IDOR (Insecure Direct Object Reference) scenarios
by creating two users, each owning a bookmark, and clients authenticated as
either of them.
"""
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import hash_password
from models.bookmark import Bookmark
from models.user import User


async def _add(db_session: AsyncSession, entity: User | Bookmark) -> None:
    db_session.add(entity)
    await db_session.flush()
    await db_session.refresh(entity)


@pytest.fixture
async def user_a(db_session: AsyncSession) -> User:
    """Create the first test user (User A)."""
    user = User(email="user-a@test.com", password_hash=hash_password("password-a"))
    await _add(db_session, user)
    return user


@pytest.fixture
async def user_b(db_session: AsyncSession) -> User:
    """Create a second test user (User B) for IDOR testing."""
    user = User(email="user-b@test.com", password_hash=hash_password("password-b"))
    await _add(db_session, user)
    return user


@pytest.fixture
async def user_a_bookmark(db_session: AsyncSession, user_a: User) -> Bookmark:
    """Create a bookmark belonging to User A."""
    bookmark = Bookmark(
        user_id=user_a.id,
        link="https://user-a-bookmark.example.com/",
        title="User A's Private Bookmark",
        description="This should only be accessible to User A",
    )
    await _add(db_session, bookmark)
    return bookmark


@pytest.fixture
async def user_b_bookmark(db_session: AsyncSession, user_b: User) -> Bookmark:
    """Create a bookmark belonging to User B."""
    bookmark = Bookmark(
        user_id=user_b.id,
        link="https://user-b-bookmark.example.com/",
        title="User B's Private Bookmark",
    )
    await _add(db_session, bookmark)
    return bookmark


async def _client_as(db_session: AsyncSession, user: User) -> AsyncGenerator[AsyncClient]:
    from core.config import get_settings

    get_settings.cache_clear()

    from api.main import app
    from core.auth import get_current_user
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    async def override_get_current_user() -> User:
        return user

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_current_user] = override_get_current_user

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
async def client_as_user_a(
    db_session: AsyncSession,
    user_a: User,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client authenticated as User A."""
    async for test_client in _client_as(db_session, user_a):
        yield test_client


@pytest.fixture
async def client_as_user_b(
    db_session: AsyncSession,
    user_b: User,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client authenticated as User B."""
    async for test_client in _client_as(db_session, user_b):
        yield test_client
