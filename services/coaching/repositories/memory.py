"""
In-Memory Repositories
======================

Process-local storage with the same interface and uniqueness behaviour as
the SQL repositories. Selected with STORAGE_MODE=memory for development
and tests; data is lost on restart.

Version: 0.1.0
"""

from typing import Any, Generic
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from services.coaching.repositories.base import ModelT, conflict_message
from shared.errors import ConflictError, ValidationError
from shared.logging import get_logger
from shared.models.common import utcnow
from shared.models.user import User


logger = get_logger(__name__)


class MemoryStore:
    """Named tables of pydantic models keyed by id."""

    def __init__(self) -> None:
        self._tables: dict[str, dict[UUID, BaseModel]] = {}

    def table(self, name: str) -> dict[UUID, BaseModel]:
        return self._tables.setdefault(name, {})

    def clear(self) -> None:
        self._tables.clear()

    def stats(self) -> dict[str, int]:
        return {name: len(rows) for name, rows in self._tables.items()}


class InMemoryRepository(Generic[ModelT]):
    """CRUD over one in-memory table. Returned models are copies."""

    def __init__(
        self,
        store: MemoryStore,
        table: str,
        owner_field: str = "user_id",
        unique_fields: tuple[str, ...] = (),
        entity: str = "Resource",
    ) -> None:
        self._rows: dict[UUID, Any] = store.table(table)
        self._owner_field = owner_field
        self._unique_fields = unique_fields
        self._entity = entity

    def _check_unique(self, candidate: ModelT) -> None:
        for field in self._unique_fields:
            value = getattr(candidate, field)
            if value is None:
                continue
            for row in self._rows.values():
                if row.id != candidate.id and getattr(row, field) == value:
                    logger.warning("unique_violation", entity=self._entity, field=field)
                    raise ConflictError(
                        conflict_message(self._entity, field),
                        details={"field": field},
                    )

    async def create(self, item: ModelT) -> ModelT:
        self._check_unique(item)
        self._rows[item.id] = item.model_copy(deep=True)
        return item.model_copy(deep=True)

    async def get(self, item_id: UUID) -> ModelT | None:
        row = self._rows.get(item_id)
        return row.model_copy(deep=True) if row is not None else None

    async def list(self, owner_id: UUID | None = None) -> list[ModelT]:
        rows = sorted(self._rows.values(), key=lambda row: row.created)
        if owner_id is not None:
            rows = [row for row in rows if getattr(row, self._owner_field) == owner_id]
        return [row.model_copy(deep=True) for row in rows]

    async def update(self, item_id: UUID, changes: dict[str, Any]) -> ModelT | None:
        row = self._rows.get(item_id)
        if row is None:
            return None
        try:
            updated = type(row).model_validate(
                {**row.model_dump(), **changes, "updated": utcnow()},
            )
        except PydanticValidationError as exc:
            fields = [".".join(str(p) for p in err["loc"]) for err in exc.errors()]
            raise ValidationError(
                f"Invalid {self._entity} data", details={"fields": fields},
            ) from exc
        self._check_unique(updated)
        self._rows[item_id] = updated
        return updated.model_copy(deep=True)

    async def delete(self, item_id: UUID) -> bool:
        return self._rows.pop(item_id, None) is not None

    async def delete_by(self, field: str, value: UUID) -> int:
        """Delete every row whose `field` equals `value`."""
        doomed = [key for key, row in self._rows.items() if getattr(row, field) == value]
        for key in doomed:
            del self._rows[key]
        return len(doomed)


class InMemoryUserRepository(InMemoryRepository[User]):
    """In-memory users with unique email/username lookups."""

    async def find_by_email(self, email: str) -> User | None:
        return self._find_one("email", email)

    async def find_by_username(self, username: str) -> User | None:
        return self._find_one("username", username)

    def _find_one(self, field: str, value: str) -> User | None:
        for row in self._rows.values():
            if getattr(row, field) == value:
                return row.model_copy(deep=True)
        return None
