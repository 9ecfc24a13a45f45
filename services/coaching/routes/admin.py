"""
Admin Routes
============

Operations restricted to Admin users.

Version: 0.1.0
"""

from fastapi import APIRouter

from services.coaching.dependencies import AdminUserDep, RepositoriesDep
from shared.logging import get_logger
from shared.models.user import UserInfo

logger = get_logger(__name__)

router = APIRouter()


@router.get("/users", response_model=list[UserInfo])
async def list_users(admin: AdminUserDep, repos: RepositoriesDep) -> list[UserInfo]:
    """List every user account. Password hashes are never included."""
    users = await repos.users.list()
    logger.info("admin_listed_users", admin_id=str(admin.id), count=len(users))
    return [user.to_info() for user in users]
