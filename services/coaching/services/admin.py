"""
Admin Bootstrap
===============

Creates the first Admin account. Registration only ever produces Students,
so this is the one path that grants the Admin role.

Version: 0.1.0
"""

import asyncio

from services.coaching.repositories.base import UserRepository
from shared.auth.password import PasswordHasher
from shared.errors import ValidationError
from shared.logging import get_logger
from shared.models.user import Role, User, UserStatus


logger = get_logger(__name__)


async def ensure_admin(
    users: UserRepository,
    hasher: PasswordHasher,
    email: str,
    password: str,
    display_name: str = "Administrator",
    min_password_length: int = 8,
) -> tuple[User, bool]:
    """
    Create an active Admin with `email` unless that email is already taken.

    Returns:
        (user, created): The admin account and whether it was created now.
        An existing account is returned unchanged, whatever its role.

    Raises:
        ValidationError: Empty email or password shorter than the minimum
    """
    if not email:
        raise ValidationError("Admin email must be provided")
    if len(password) < min_password_length:
        raise ValidationError(
            f"Password must be at least {min_password_length} characters",
        )

    existing = await users.find_by_email(email)
    if existing is not None:
        if existing.role != Role.ADMIN:
            logger.warning("admin_email_taken_by_non_admin", user_id=str(existing.id))
        return existing, False

    password_hash = await asyncio.to_thread(hasher.hash, password)
    admin = await users.create(
        User(
            email=email,
            display_name=display_name,
            password_hash=password_hash,
            role=Role.ADMIN,
            status=UserStatus.ACTIVE,
        ),
    )
    logger.info("admin_created", user_id=str(admin.id))
    return admin, True
