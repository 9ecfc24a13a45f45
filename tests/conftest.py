"""
Test Configuration
==================

Pytest fixtures for English Coaching tests.
"""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["STORAGE_MODE"] = "memory"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-that-is-at-least-32-chars"
os.environ["PASSWORD_TIME_COST"] = "1"
os.environ["PASSWORD_MEMORY_COST"] = "1024"


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_store() -> None:
    """Start every test with empty in-memory storage."""
    from services.coaching.dependencies import reset_memory_store

    reset_memory_store()


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the coaching service."""
    from services.coaching.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def hasher() -> Any:
    """Argon2 hasher with cheap test parameters."""
    from shared.auth.password import PasswordHasher

    return PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)


@pytest.fixture
def jane_data() -> dict[str, Any]:
    """Registration body for a typical student."""
    return {
        "display_name": "Jane",
        "email": "jane@x.io",
        "password": "abcdefgh",
    }


RegisterFn = Callable[..., Awaitable[dict[str, Any]]]


@pytest.fixture
def register_user(client: AsyncClient) -> RegisterFn:
    """
    Register a user through the API.

    Returns the response body; the token is at ["token"].
    """

    async def _register(
        email: str | None = None,
        username: str | None = None,
        display_name: str = "Test User",
        password: str = "password123",
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"display_name": display_name, "password": password}
        if email is not None:
            body["email"] = email
        if username is not None:
            body["username"] = username
        response = await client.post("/api/auth/register", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def admin_token(client: AsyncClient, hasher: Any) -> Callable[[], Awaitable[str]]:
    """Seed an Admin into memory storage and return a function that logs it in."""
    from services.coaching.dependencies import get_memory_store
    from services.coaching.repositories import memory_repositories
    from services.coaching.services.admin import ensure_admin

    async def _login() -> str:
        repos = memory_repositories(get_memory_store())
        await ensure_admin(repos.users, hasher, email="admin@x.io", password="admin-pass-1")
        response = await client.post(
            "/api/auth/login",
            json={"login": "admin@x.io", "password": "admin-pass-1"},
        )
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _login


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
