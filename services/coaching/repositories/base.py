"""
Repository Interfaces
=====================

The storage contract the coaching service depends on. Implementations:
`SqlRepository` (PostgreSQL) and `InMemoryRepository` (development and
tests).

Version: 0.1.0
"""

from typing import Any, Protocol, TypeVar
from uuid import UUID

from pydantic import BaseModel

from shared.models.user import User


ModelT = TypeVar("ModelT", bound=BaseModel)


class Repository(Protocol[ModelT]):
    """Create / read / list / update / delete by id or owner."""

    async def create(self, item: ModelT) -> ModelT: ...

    async def get(self, item_id: UUID) -> ModelT | None: ...

    async def list(self, owner_id: UUID | None = None) -> list[ModelT]: ...

    async def update(self, item_id: UUID, changes: dict[str, Any]) -> ModelT | None: ...

    async def delete(self, item_id: UUID) -> bool: ...

    async def delete_by(self, field: str, value: UUID) -> int: ...


class UserRepository(Repository[User], Protocol):
    """User storage with unique lookups used by credential resolution."""

    async def find_by_email(self, email: str) -> User | None: ...

    async def find_by_username(self, username: str) -> User | None: ...


def conflict_message(entity: str, field: str | None) -> str:
    """Human-readable uniqueness violation message."""
    if field is None:
        return f"{entity} already exists"
    return f"{field.replace('_', ' ').capitalize()} already exists"
