"""
Authentication Module
=====================

JWT-based authentication and ownership authorization.

Features:
- Argon2 password hashing
- JWT issuance, verification and refresh
- Login identifier resolution (email vs. username)
- Ownership-based access decisions
- FastAPI dependencies for route protection

Usage:
    from shared.auth import (
        PasswordHasher,
        TokenCodec,
        can_access,
        ownership_filter,
    )

    hasher = PasswordHasher()
    hashed = hasher.hash("user_password")
    if hasher.verify("user_password", hashed):
        token = codec.issue(user.id, user.role)

    # Scope list queries
    owner = ownership_filter(principal)
    notes = await repo.list(owner_id=owner)
"""

from shared.auth.authorization import (
    OwnedResource,
    Principal,
    can_access,
    is_admin,
    ownership_filter,
    require_admin,
)
from shared.auth.credentials import (
    CredentialNotFound,
    CredentialResolver,
    IdentifierKind,
    UserLookup,
    classify,
)
from shared.auth.dependencies import (
    BearerTokenDep,
    PasswordHasherDep,
    TokenCodecDep,
    get_bearer_token,
    get_password_hasher,
    get_token_codec,
    oauth2_scheme,
)
from shared.auth.jwt import (
    ExpiredToken,
    InvalidToken,
    SignatureMismatch,
    TokenClaims,
    TokenCodec,
    TokenError,
    TokenSigningError,
)
from shared.auth.password import (
    InvalidPasswordHash,
    PasswordHasher,
    PasswordHashingError,
)

__all__ = [
    # JWT
    "TokenCodec",
    "TokenClaims",
    "TokenError",
    "TokenSigningError",
    "InvalidToken",
    "SignatureMismatch",
    "ExpiredToken",
    # Password
    "PasswordHasher",
    "PasswordHashingError",
    "InvalidPasswordHash",
    # Credentials
    "CredentialResolver",
    "CredentialNotFound",
    "IdentifierKind",
    "UserLookup",
    "classify",
    # Authorization
    "OwnedResource",
    "Principal",
    "can_access",
    "is_admin",
    "ownership_filter",
    "require_admin",
    # Dependencies
    "get_token_codec",
    "get_password_hasher",
    "get_bearer_token",
    "oauth2_scheme",
    "TokenCodecDep",
    "PasswordHasherDep",
    "BearerTokenDep",
]
