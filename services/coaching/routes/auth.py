"""
Auth Routes
===========

Registration, login, token refresh and the current user's profile.

Version: 0.1.0
"""

from fastapi import APIRouter, status

from services.coaching.dependencies import AuthServiceDep, CurrentUserDep
from shared.logging import get_logger
from shared.models.auth import (
    AuthResponse,
    LoginRequest,
    RefreshTokenRequest,
    RefreshTokenResponse,
    RegisterRequest,
)
from shared.models.user import UserInfo

logger = get_logger(__name__)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, auth: AuthServiceDep) -> AuthResponse:
    """
    Create a Student account and return a token for it.

    At least one of email or username is required.
    """
    return await auth.register(request)


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, auth: AuthServiceDep) -> AuthResponse:
    """Sign in with an email or username and a password."""
    return await auth.login(request)


@router.post("/refresh", response_model=RefreshTokenResponse)
async def refresh(request: RefreshTokenRequest, auth: AuthServiceDep) -> RefreshTokenResponse:
    """Exchange a valid token for one with a later expiry."""
    token = await auth.refresh_token(request.token)
    return RefreshTokenResponse(token=token)


@router.get("/me", response_model=UserInfo)
async def me(user: CurrentUserDep) -> UserInfo:
    return user.to_info()
