"""Shared fixtures for API tests."""
from collections.abc import Awaitable, Callable

import pytest
from httpx import AsyncClient

SignupFn = Callable[..., Awaitable[dict[str, str]]]


@pytest.fixture
def signup(client: AsyncClient) -> SignupFn:
    """
    Factory fixture that signs up a user through the API.

    Usage:
        headers = await signup("user2@example.com")
        response = await client.get("/bookmarks", headers=headers)
    """

    async def _signup(email: str, password: str = "1234") -> dict[str, str]:
        response = await client.post(
            "/auth/signup",
            json={"email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _signup


@pytest.fixture
async def auth_headers(signup: SignupFn) -> dict[str, str]:
    """Authorization header for a freshly signed-up user."""
    return await signup("user1@example.com")
