"""
Ownership Authorization
=======================

Pure access-control decisions for user-owned resources. Handlers fetch a
resource, then ask `can_access`; list handlers shape their storage query
with `ownership_filter` instead of filtering results afterwards.

Version: 0.1.0
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from shared.errors import ForbiddenError
from shared.models.user import Role


@runtime_checkable
class OwnedResource(Protocol):
    """Anything that belongs to a single user."""

    def owner_id(self) -> UUID: ...


class Principal(Protocol):
    """The authenticated caller."""

    id: UUID
    role: Role


def is_admin(principal: Principal) -> bool:
    return principal.role == Role.ADMIN


def can_access(principal: Principal, resource: OwnedResource) -> bool:
    """
    Decide whether the caller may read or modify a resource.

    Access is granted if the caller is an admin or owns the resource.
    """
    return is_admin(principal) or principal.id == resource.owner_id()


def ownership_filter(principal: Principal) -> UUID | None:
    """
    Owner id to scope list queries with.

    Returns:
        None for admins (no filter), otherwise the caller's own id
    """
    if is_admin(principal):
        return None
    return principal.id


def require_admin(principal: Principal) -> None:
    """
    Guard for admin-only operations.

    Raises:
        ForbiddenError: If the caller is not an admin
    """
    if not is_admin(principal):
        raise ForbiddenError("Admin access required")
