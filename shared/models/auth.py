"""
Authentication Models
=====================

Request and response bodies for the /api/auth endpoints.

Version: 0.1.0
"""

from pydantic import AliasChoices, BaseModel, Field, field_validator

from shared.models.user import UserInfo


class RegisterRequest(BaseModel):
    """Request model for account registration."""

    display_name: str
    email: str | None = None
    username: str | None = None
    password: str

    @field_validator("email", "username", mode="before")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat blank identifiers as absent."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class LoginRequest(BaseModel):
    """Request model for login with an email or a username."""

    login: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("login", "identifier", "email", "username"),
        description="Email address or username",
    )
    password: str


class RefreshTokenRequest(BaseModel):
    """Request model for token refresh."""

    token: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Token plus the authenticated user."""

    token: str
    user: UserInfo


class RefreshTokenResponse(BaseModel):
    token: str
