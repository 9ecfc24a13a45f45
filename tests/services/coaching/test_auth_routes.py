"""
Auth Route Tests
================

End-to-end tests for /api/auth against in-memory storage.

Version: 0.1.0
"""

from typing import Any
from uuid import UUID

import pytest
from httpx import AsyncClient

from services.coaching.dependencies import get_memory_store
from services.coaching.repositories import memory_repositories
from shared.auth.dependencies import get_token_codec
from shared.models.user import Role, UserStatus
from tests.conftest import RegisterFn, bearer


class TestRegister:
    """Tests for POST /api/auth/register."""

    @pytest.mark.asyncio
    async def test_register_then_me(
        self, client: AsyncClient, jane_data: dict[str, Any],
    ) -> None:
        """Registering returns a token that identifies the new student."""
        response = await client.post("/api/auth/register", json=jane_data)

        assert response.status_code == 201
        body = response.json()
        assert body["user"]["role"] == "Student"
        assert body["user"]["status"] == "Pending"
        assert "password_hash" not in body["user"]

        claims = get_token_codec().verify(body["token"])
        assert claims.role == Role.STUDENT
        assert claims.sub == body["user"]["id"]

        me = await client.get("/api/auth/me", headers=bearer(body["token"]))

        assert me.status_code == 200
        profile = me.json()
        assert profile["id"] == body["user"]["id"]
        assert profile["email"] == "jane@x.io"
        assert profile["display_name"] == "Jane"
        assert "password" not in profile
        assert "password_hash" not in profile

    @pytest.mark.asyncio
    async def test_seven_char_password_rejected(
        self, client: AsyncClient, jane_data: dict[str, Any],
    ) -> None:
        response = await client.post(
            "/api/auth/register", json={**jane_data, "password": "abcdefg"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "validation"

    @pytest.mark.asyncio
    async def test_eight_char_password_accepted(
        self, client: AsyncClient, jane_data: dict[str, Any],
    ) -> None:
        response = await client.post(
            "/api/auth/register", json={**jane_data, "password": "abcdefgh"},
        )

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_duplicate_email_conflict(
        self, client: AsyncClient, jane_data: dict[str, Any],
    ) -> None:
        await client.post("/api/auth/register", json=jane_data)

        response = await client.post(
            "/api/auth/register", json={**jane_data, "display_name": "Jane Two"},
        )

        assert response.status_code == 409
        assert response.json()["error"] == "Email already exists"

    @pytest.mark.asyncio
    async def test_no_identifier_rejected(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/auth/register",
            json={"display_name": "Nobody", "email": "  ", "password": "abcdefgh"},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_fields_are_400(self, client: AsyncClient) -> None:
        response = await client.post("/api/auth/register", json={"email": "a@b.c"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "validation"

    @pytest.mark.asyncio
    async def test_role_in_body_ignored(
        self, client: AsyncClient, jane_data: dict[str, Any],
    ) -> None:
        """Self-registration can never grant a role."""
        response = await client.post(
            "/api/auth/register", json={**jane_data, "role": "Admin"},
        )

        assert response.status_code == 201
        assert response.json()["user"]["role"] == "Student"


class TestLogin:
    """Tests for POST /api/auth/login."""

    @pytest.mark.asyncio
    async def test_login_by_email(self, client: AsyncClient, register_user: RegisterFn) -> None:
        registered = await register_user(email="sam@x.io", password="password123")

        response = await client.post(
            "/api/auth/login", json={"login": "sam@x.io", "password": "password123"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == registered["user"]["id"]

    @pytest.mark.asyncio
    async def test_login_by_username_alias(
        self, client: AsyncClient, register_user: RegisterFn,
    ) -> None:
        await register_user(username="sam", password="password123")

        response = await client.post(
            "/api/auth/login", json={"username": "sam", "password": "password123"},
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_failures_are_indistinguishable(
        self, client: AsyncClient, register_user: RegisterFn,
    ) -> None:
        await register_user(email="sam@x.io", password="password123")

        wrong_password = await client.post(
            "/api/auth/login", json={"login": "sam@x.io", "password": "nope-nope"},
        )
        unknown_user = await client.post(
            "/api/auth/login", json={"login": "ghost@x.io", "password": "password123"},
        )

        assert wrong_password.status_code == unknown_user.status_code == 401
        assert wrong_password.json()["error"] == unknown_user.json()["error"]

    @pytest.mark.asyncio
    async def test_suspended_user_forbidden(
        self, client: AsyncClient, register_user: RegisterFn,
    ) -> None:
        registered = await register_user(email="sam@x.io", password="password123")
        users = memory_repositories(get_memory_store()).users
        await users.update(UUID(registered["user"]["id"]), {"status": UserStatus.SUSPENDED})

        login = await client.post(
            "/api/auth/login", json={"login": "sam@x.io", "password": "password123"},
        )
        me = await client.get("/api/auth/me", headers=bearer(registered["token"]))

        assert login.status_code == 403
        assert me.status_code == 403


class TestTokens:
    """Tests for /api/auth/refresh and bearer handling."""

    @pytest.mark.asyncio
    async def test_refresh(self, client: AsyncClient, register_user: RegisterFn) -> None:
        registered = await register_user(email="sam@x.io")

        response = await client.post(
            "/api/auth/refresh", json={"token": registered["token"]},
        )

        assert response.status_code == 200
        me = await client.get("/api/auth/me", headers=bearer(response.json()["token"]))
        assert me.json()["id"] == registered["user"]["id"]

    @pytest.mark.asyncio
    async def test_refresh_invalid_token(self, client: AsyncClient) -> None:
        response = await client.post("/api/auth/refresh", json={"token": "junk"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me_without_header(self, client: AsyncClient) -> None:
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["error_code"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_me_with_non_bearer_scheme(self, client: AsyncClient) -> None:
        response = await client.get("/api/auth/me", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me_with_tampered_token(
        self, client: AsyncClient, register_user: RegisterFn,
    ) -> None:
        registered = await register_user(email="sam@x.io")
        head, payload, signature = registered["token"].split(".")
        forged = "B" if signature[0] == "A" else "A"

        response = await client.get(
            "/api/auth/me", headers=bearer(f"{head}.{payload}.{forged}{signature[1:]}"),
        )

        assert response.status_code == 401


class TestHealth:
    """Tests for service health endpoints."""

    @pytest.mark.asyncio
    async def test_health_reports_memory_storage(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert "memory" in body["components"]

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient) -> None:
        response = await client.get("/")

        assert response.json()["service"] == "English Coaching API"
