"""
User Database Model
===================

SQLAlchemy ORM model for user accounts.

Version: 0.1.0
"""

from sqlalchemy import Column, DateTime, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID

from shared.database.postgres import Base
from shared.models.common import new_id, utcnow
from shared.models.user import Role, UserStatus


class UserRecord(Base):
    """
    SQLAlchemy model for user accounts.

    Email and username are each unique; the storage layer is the single
    source of truth for those constraints.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_email", "email"),
        Index("idx_users_username", "username"),
        Index("idx_users_created", "created"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=new_id)
    username = Column(String(255), unique=True)
    email = Column(String(255), unique=True)
    display_name = Column(String(255))
    password_hash = Column(Text, nullable=False)
    role = Column(Text, nullable=False, default=Role.STUDENT.value)
    status = Column(Text, nullable=False, default=UserStatus.PENDING.value)
    created = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.username or self.email} ({self.role})>"
