"""
Coaching Service Dependencies
=============================

FastAPI dependencies wiring storage, the auth service and the current
principal into route handlers.

Version: 0.1.0
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends

from services.coaching.repositories import (
    MemoryStore,
    Repositories,
    memory_repositories,
    sql_repositories,
)
from services.coaching.services.auth import AuthService
from shared.auth.authorization import require_admin
from shared.auth.dependencies import BearerTokenDep, PasswordHasherDep, TokenCodecDep
from shared.config import StorageMode, settings
from shared.database.postgres import postgres_session
from shared.models.user import User


_memory_store = MemoryStore()


def get_memory_store() -> MemoryStore:
    """Process-wide store used when STORAGE_MODE=memory."""
    return _memory_store


def reset_memory_store() -> None:
    _memory_store.clear()


async def get_repositories() -> AsyncGenerator[Repositories, None]:
    """
    Yield repositories for one request.

    In postgres mode the request shares a single session that commits when
    the handler returns and rolls back if it raises.
    """
    if settings.storage.mode == StorageMode.MEMORY:
        yield memory_repositories(_memory_store)
        return

    async with postgres_session() as session:
        yield sql_repositories(session)


RepositoriesDep = Annotated[Repositories, Depends(get_repositories)]


def get_auth_service(
    repos: RepositoriesDep,
    token_codec: TokenCodecDep,
    password_hasher: PasswordHasherDep,
) -> AuthService:
    return AuthService(
        users=repos.users,
        token_codec=token_codec,
        password_hasher=password_hasher,
        min_password_length=settings.password.min_length,
    )


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_current_user(token: BearerTokenDep, auth: AuthServiceDep) -> User:
    """
    Resolve the bearer token to the calling user.

    Raises:
        UnauthorizedError: Missing, invalid or expired token, or unknown subject
        ForbiddenError: Account suspended
    """
    return await auth.verify_and_get_user(token)


CurrentUserDep = Annotated[User, Depends(get_current_user)]


async def require_admin_user(user: CurrentUserDep) -> User:
    """
    Require the calling user to be an Admin.

    Raises:
        ForbiddenError: Caller is not an Admin
    """
    require_admin(user)
    return user


AdminUserDep = Annotated[User, Depends(require_admin_user)]
