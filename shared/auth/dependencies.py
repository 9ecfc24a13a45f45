"""
FastAPI Authentication Dependencies
===================================

Process-wide auth components built from settings, and bearer token
extraction for route protection.

Version: 0.1.0
"""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from shared.auth.jwt import TokenCodec
from shared.auth.password import PasswordHasher
from shared.config import get_settings
from shared.errors import UnauthorizedError
from shared.logging import get_logger


logger = get_logger(__name__)

# OAuth2 scheme for token extraction from Authorization header
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/api/auth/login",
    auto_error=False,
)


@lru_cache
def get_token_codec() -> TokenCodec:
    """
    Build the token codec from JWT settings.

    Cached so the signing secret is read once per process.
    """
    jwt_settings = get_settings().jwt
    return TokenCodec(
        secret=jwt_settings.secret_key.get_secret_value(),
        ttl=timedelta(hours=jwt_settings.expire_hours),
        algorithm=jwt_settings.algorithm,
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Build the Argon2 hasher from password settings."""
    password_settings = get_settings().password
    return PasswordHasher(
        time_cost=password_settings.time_cost,
        memory_cost=password_settings.memory_cost,
        parallelism=password_settings.parallelism,
    )


async def get_bearer_token(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> str:
    """
    Extract the bearer token from the Authorization header.

    Raises:
        UnauthorizedError: If the header is missing or not a Bearer token
    """
    if not token:
        logger.warning("auth_token_missing")
        raise UnauthorizedError(
            "Missing or invalid Authorization header",
            details={"expected": "Authorization: Bearer <token>"},
        )
    return token


TokenCodecDep = Annotated[TokenCodec, Depends(get_token_codec)]
PasswordHasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]
BearerTokenDep = Annotated[str, Depends(get_bearer_token)]
