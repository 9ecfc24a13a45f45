"""
Authentication Service
======================

Registration, login, token refresh and token-to-user resolution.

Failure policy:
- Unknown identifier and wrong password produce the same Unauthorized
  error, so callers cannot tell which accounts exist.
- Token failures of every kind surface as Unauthorized.
- Suspended accounts surface as Forbidden.
- Hashing, signing and stored-hash failures surface as Internal.

Known gaps, kept deliberately:
- `refresh_token` does not revoke the presented token and does not
  re-check the user in storage; a user suspended after issuance can keep
  refreshing until the token expires.
- Expiry is compared against the local clock with no skew allowance.

Version: 0.1.0
"""

import asyncio
from uuid import UUID

from services.coaching.repositories.base import UserRepository
from shared.auth.credentials import CredentialNotFound, CredentialResolver
from shared.auth.jwt import TokenClaims, TokenCodec, TokenError, TokenSigningError
from shared.auth.password import (
    InvalidPasswordHash,
    PasswordHasher,
    PasswordHashingError,
)
from shared.errors import (
    ForbiddenError,
    InternalError,
    UnauthorizedError,
    ValidationError,
)
from shared.logging import get_logger
from shared.models.auth import AuthResponse, LoginRequest, RegisterRequest
from shared.models.user import Role, User, UserStatus


logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
ACCOUNT_SUSPENDED = "Account is suspended or inactive"


class AuthService:
    """
    Orchestrates credential checks and token issuance.

    Args:
        users: User repository
        token_codec: Signs and verifies tokens
        password_hasher: Argon2 hasher
        min_password_length: Shortest accepted password
    """

    def __init__(
        self,
        users: UserRepository,
        token_codec: TokenCodec,
        password_hasher: PasswordHasher,
        min_password_length: int = 8,
    ) -> None:
        self._users = users
        self._tokens = token_codec
        self._hasher = password_hasher
        self._resolver = CredentialResolver(users)
        self._min_password_length = min_password_length

    # =========================================================================
    # Registration & login
    # =========================================================================

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Create a Student account in Pending status and sign it in.

        Raises:
            ValidationError: Missing identifier, empty display name, short password
            ConflictError: Email or username already taken (from the repository)
        """
        self._validate_registration(request)

        password_hash = await self._hash(request.password)
        user = User(
            display_name=request.display_name.strip(),
            email=request.email,
            username=request.username,
            password_hash=password_hash,
            role=Role.STUDENT,
            status=UserStatus.PENDING,
        )
        user = await self._users.create(user)

        logger.info("user_registered", user_id=str(user.id), role=user.role.value)
        return AuthResponse(token=self._issue(user), user=user.to_info())

    async def login(self, request: LoginRequest) -> AuthResponse:
        """
        Authenticate with an email or username plus password.

        Raises:
            UnauthorizedError: Unknown identifier or wrong password (same message)
            ForbiddenError: Account suspended
        """
        try:
            user = await self._resolver.resolve(request.login)
        except CredentialNotFound:
            # Same Argon2 work as a real check, so timing does not reveal accounts.
            await asyncio.to_thread(self._hasher.dummy_verify)
            logger.info("login_failed", reason="unknown_identifier")
            raise UnauthorizedError(INVALID_CREDENTIALS) from None

        if not await self._verify_password(request.password, user):
            logger.info("login_failed", reason="wrong_password", user_id=str(user.id))
            raise UnauthorizedError(INVALID_CREDENTIALS)

        self._ensure_can_authenticate(user)
        await self._rehash_if_outdated(user, request.password)

        logger.info("login_succeeded", user_id=str(user.id))
        return AuthResponse(token=self._issue(user), user=user.to_info())

    # =========================================================================
    # Tokens
    # =========================================================================

    async def refresh_token(self, token: str) -> str:
        """
        Exchange a valid token for one with a later expiry.

        Raises:
            UnauthorizedError: Invalid, tampered or expired token
        """
        try:
            return self._tokens.refresh(token)
        except TokenError as exc:
            raise UnauthorizedError(_token_error_message(exc)) from exc
        except TokenSigningError as exc:
            raise InternalError("Token generation failed") from exc

    def verify_token(self, token: str) -> TokenClaims:
        """
        Verify a token and return its claims without touching storage.

        Raises:
            UnauthorizedError: Invalid, tampered or expired token
        """
        try:
            return self._tokens.verify(token)
        except TokenError as exc:
            raise UnauthorizedError(_token_error_message(exc)) from exc

    async def verify_and_get_user(self, token: str) -> User:
        """
        Resolve a bearer token to a current, non-suspended user.

        Raises:
            UnauthorizedError: Bad token, or its subject no longer exists
            ForbiddenError: Account suspended
        """
        claims = self.verify_token(token)
        try:
            user_id = UUID(claims.sub)
        except ValueError:
            raise UnauthorizedError("Invalid user ID in token") from None

        user = await self._users.get(user_id)
        if user is None:
            logger.warning("token_subject_missing", user_id=claims.sub)
            raise UnauthorizedError("User not found")

        self._ensure_can_authenticate(user)
        return user

    # =========================================================================
    # Helpers
    # =========================================================================

    def _validate_registration(self, request: RegisterRequest) -> None:
        if request.email is None and request.username is None:
            raise ValidationError("Either username or email must be provided")
        if not request.display_name.strip():
            raise ValidationError("Display name cannot be empty")
        if len(request.password) < self._min_password_length:
            raise ValidationError(
                f"Password must be at least {self._min_password_length} characters",
            )

    async def _hash(self, password: str) -> str:
        try:
            return await asyncio.to_thread(self._hasher.hash, password)
        except PasswordHashingError as exc:
            logger.error("password_hashing_failed", error=str(exc))
            raise InternalError("Password hashing failed") from exc

    async def _verify_password(self, password: str, user: User) -> bool:
        try:
            return await asyncio.to_thread(self._hasher.verify, password, user.password_hash)
        except InvalidPasswordHash as exc:
            logger.error("stored_hash_invalid", user_id=str(user.id), error=str(exc))
            raise InternalError("Password verification failed") from exc

    async def _rehash_if_outdated(self, user: User, password: str) -> None:
        """Upgrade a hash made with older Argon2 costs after a successful login."""
        if not self._hasher.needs_rehash(user.password_hash):
            return
        try:
            new_hash = await asyncio.to_thread(self._hasher.hash, password)
        except PasswordHashingError as exc:
            logger.warning("password_rehash_failed", user_id=str(user.id), error=str(exc))
            return
        await self._users.update(user.id, {"password_hash": new_hash})
        logger.info("password_rehashed", user_id=str(user.id))

    def _issue(self, user: User) -> str:
        try:
            return self._tokens.issue(user.id, user.role)
        except TokenSigningError as exc:
            raise InternalError("Token generation failed") from exc

    @staticmethod
    def _ensure_can_authenticate(user: User) -> None:
        if not user.status.can_authenticate:
            logger.warning("suspended_user_rejected", user_id=str(user.id))
            raise ForbiddenError(ACCOUNT_SUSPENDED)


def _token_error_message(exc: TokenError) -> str:
    return f"Invalid or expired token: {exc}"
