"""
SQL Repositories
================

Generic async SQLAlchemy repository, parameterised by ORM record class,
pydantic model class and owner column instead of one hand-written class
per table.

Version: 0.1.0
"""

from enum import Enum
from typing import Any, Generic
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from services.coaching.repositories.base import ModelT, conflict_message
from shared.errors import ConflictError, ValidationError
from shared.logging import get_logger
from shared.models.common import utcnow
from shared.models.user import User


logger = get_logger(__name__)

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def _column_values(values: dict[str, Any]) -> dict[str, Any]:
    """Store enum members by value."""
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in values.items()
    }


def _is_unique_violation(orig: BaseException | None) -> bool:
    """True for a unique-constraint failure reported by the driver."""
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == UNIQUE_VIOLATION
    return "duplicate key" in str(orig).lower()


class SqlRepository(Generic[ModelT]):
    """
    CRUD over one table.

    Args:
        session: Request-scoped session; the caller owns commit/rollback
        record_class: ORM model mapped to the table
        model_class: Pydantic model returned to callers
        owner_column: Column compared against `owner_id` in `list`
        unique_fields: Columns with unique constraints, used to name the
            field in conflict errors
        entity: Display name used in messages
    """

    def __init__(
        self,
        session: AsyncSession,
        record_class: type[Any],
        model_class: type[ModelT],
        owner_column: str = "user_id",
        unique_fields: tuple[str, ...] = (),
        entity: str = "Resource",
    ) -> None:
        self._session = session
        self._record_class = record_class
        self._model_class = model_class
        self._owner_column = owner_column
        self._unique_fields = unique_fields
        self._entity = entity

    def _to_model(self, record: Any) -> ModelT:
        return self._model_class.model_validate(record)

    async def _flush(self) -> None:
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            if not _is_unique_violation(exc.orig):
                logger.warning("constraint_violation", entity=self._entity, error=str(exc.orig))
                raise ValidationError(f"Invalid {self._entity} data") from exc
            message = str(exc.orig).lower()
            field = next((f for f in self._unique_fields if f in message), None)
            logger.warning("unique_violation", entity=self._entity, field=field)
            raise ConflictError(
                conflict_message(self._entity, field),
                details={"field": field} if field else None,
            ) from exc

    async def create(self, item: ModelT) -> ModelT:
        record = self._record_class(**_column_values(item.model_dump()))
        self._session.add(record)
        await self._flush()
        return self._to_model(record)

    async def get(self, item_id: UUID) -> ModelT | None:
        record = await self._session.get(self._record_class, item_id)
        return self._to_model(record) if record is not None else None

    async def list(self, owner_id: UUID | None = None) -> list[ModelT]:
        stmt = select(self._record_class).order_by(self._record_class.created)
        if owner_id is not None:
            stmt = stmt.where(getattr(self._record_class, self._owner_column) == owner_id)
        result = await self._session.execute(stmt)
        return [self._to_model(record) for record in result.scalars().all()]

    async def update(self, item_id: UUID, changes: dict[str, Any]) -> ModelT | None:
        record = await self._session.get(self._record_class, item_id)
        if record is None:
            return None
        for key, value in _column_values(changes).items():
            setattr(record, key, value)
        record.updated = utcnow()
        await self._flush()
        return self._to_model(record)

    async def delete(self, item_id: UUID) -> bool:
        record = await self._session.get(self._record_class, item_id)
        if record is None:
            return False
        await self._session.delete(record)
        await self._flush()
        return True

    async def delete_by(self, field: str, value: UUID) -> int:
        """Delete every row whose `field` equals `value`."""
        stmt = delete(self._record_class).where(getattr(self._record_class, field) == value)
        result = await self._session.execute(stmt)
        return result.rowcount or 0


class SqlUserRepository(SqlRepository[User]):
    """User table with unique email/username lookups."""

    async def find_by_email(self, email: str) -> User | None:
        return await self._find_one(self._record_class.email == email)

    async def find_by_username(self, username: str) -> User | None:
        return await self._find_one(self._record_class.username == username)

    async def _find_one(self, condition: Any) -> User | None:
        result = await self._session.execute(select(self._record_class).where(condition))
        record = result.scalar_one_or_none()
        return self._to_model(record) if record is not None else None
