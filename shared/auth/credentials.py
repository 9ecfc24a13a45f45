"""
Credential Resolution
=====================

Maps a login identifier to a stored user. An identifier containing "@"
is looked up as an email, anything else as a username; this is a routing
heuristic, not address validation.

Version: 0.1.0
"""

from enum import Enum
from typing import Protocol

from shared.logging import get_logger
from shared.models.user import User


logger = get_logger(__name__)


class IdentifierKind(str, Enum):
    """How a login identifier is looked up."""

    EMAIL = "email"
    USERNAME = "username"


class CredentialNotFound(LookupError):
    """No user matches the login identifier."""


class UserLookup(Protocol):
    """Unique user lookups provided by the user repository."""

    async def find_by_email(self, email: str) -> User | None: ...

    async def find_by_username(self, username: str) -> User | None: ...


def classify(identifier: str) -> IdentifierKind:
    """Classify a login identifier as email or username."""
    if "@" in identifier:
        return IdentifierKind.EMAIL
    return IdentifierKind.USERNAME


class CredentialResolver:
    """Resolve login identifiers through a `UserLookup`."""

    def __init__(self, users: UserLookup) -> None:
        self._users = users

    async def resolve(self, identifier: str) -> User:
        """
        Find the user a login identifier refers to.

        Raises:
            CredentialNotFound: If no user matches
        """
        kind = classify(identifier)
        if kind is IdentifierKind.EMAIL:
            user = await self._users.find_by_email(identifier)
        else:
            user = await self._users.find_by_username(identifier)

        if user is None:
            logger.debug("credential_not_found", kind=kind.value)
            raise CredentialNotFound(kind.value)
        return user
