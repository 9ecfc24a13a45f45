"""
User Models
===========

Identity records and their outward-facing representation.

Version: 0.1.0
"""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shared.models.common import new_id, utcnow


class Role(str, Enum):
    """User roles."""

    STUDENT = "Student"
    TEACHER = "Teacher"
    ADMIN = "Admin"


class UserStatus(str, Enum):
    """Account lifecycle states."""

    PENDING = "Pending"
    ACTIVE = "Active"
    SUSPENDED = "Suspended"

    @property
    def can_authenticate(self) -> bool:
        """Pending and active accounts may sign in."""
        return self in (UserStatus.PENDING, UserStatus.ACTIVE)


class User(BaseModel):
    """
    Stored user record.

    Holds the password hash, so it must never be returned from an endpoint
    directly; convert with `to_info()` first.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(default_factory=new_id)
    username: str | None = None
    email: str | None = None
    display_name: str
    password_hash: str = Field(repr=False)
    role: Role = Role.STUDENT
    status: UserStatus = UserStatus.PENDING
    created: datetime = Field(default_factory=utcnow)
    updated: datetime = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def require_login_identifier(self) -> "User":
        if self.username is None and self.email is None:
            raise ValueError("Either username or email must be provided")
        return self

    def to_info(self) -> "UserInfo":
        """Project to the public representation."""
        return UserInfo.model_validate(self.model_dump(exclude={"password_hash"}))


class UserInfo(BaseModel):
    """User as seen by API clients."""

    id: UUID
    username: str | None = None
    email: str | None = None
    display_name: str
    role: Role
    status: UserStatus
    created: datetime
    updated: datetime
