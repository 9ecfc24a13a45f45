"""
JWT Token Management
====================

Issues, verifies and refreshes signed, expiring tokens carrying the
subject id and role.

Version: 0.1.0
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from jose.exceptions import JOSEError, JWTClaimsError
from pydantic import BaseModel, Field, ValidationError

from shared.errors import ConfigurationError
from shared.logging import get_logger
from shared.models.user import Role


logger = get_logger(__name__)


class TokenError(Exception):
    """Base class for token verification failures."""


class InvalidToken(TokenError):
    """Token is malformed or its claims are missing or ill-typed."""


class SignatureMismatch(TokenError):
    """Token signature does not verify against the signing secret."""


class ExpiredToken(TokenError):
    """Token expiry is at or before the current time."""


class TokenSigningError(RuntimeError):
    """The signing backend could not produce a token."""


class TokenClaims(BaseModel):
    """Decoded JWT token payload."""

    sub: str = Field(..., min_length=1, description="Subject (user ID)")
    role: Role = Field(..., description="User role")
    iat: datetime = Field(..., description="Issued at")
    exp: datetime = Field(..., description="Expiration time")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TokenCodec:
    """
    HMAC-signed token issuer and verifier.

    The secret and lifetime are injected once at startup; nothing here reads
    global configuration.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ConfigurationError("JWT signing secret must not be empty")
        if ttl <= timedelta(0):
            raise ConfigurationError("JWT lifetime must be positive")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(
        self,
        subject_id: Any,
        role: Role,
        ttl: timedelta | None = None,
    ) -> str:
        """
        Create a signed token.

        Args:
            subject_id: User ID placed in `sub`
            role: Role placed in `role`
            ttl: Lifetime override (defaults to the configured lifetime)

        Returns:
            str: Compact `header.claims.signature` token
        """
        lifetime = self._ttl if ttl is None else ttl
        if lifetime <= timedelta(0):
            raise ConfigurationError("JWT lifetime must be positive")
        issued_at = self._clock()
        return self._encode(str(subject_id), role, issued_at, issued_at + lifetime)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token.

        Args:
            token: JWT token string

        Returns:
            TokenClaims: Decoded claims

        Raises:
            InvalidToken: Malformed token or claims
            SignatureMismatch: Signature or algorithm check failed
            ExpiredToken: exp <= now (no leeway)
        """
        # Parse the header and claims segments independently of the
        # signature bytes so structural damage and forgery are told apart.
        signing_input, _, _ = token.rpartition(".")
        try:
            jwt.get_unverified_claims(f"{signing_input}.")
        except JWTError as exc:
            logger.warning("token_malformed", error=str(exc))
            raise InvalidToken("Malformed token") from exc

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTClaimsError as exc:
            logger.warning("token_claims_invalid", error=str(exc))
            raise InvalidToken(str(exc)) from exc
        except JWTError as exc:
            logger.warning("token_signature_mismatch", error=str(exc))
            raise SignatureMismatch("Token signature verification failed") from exc

        claims = self._parse_claims(payload)
        if claims.exp <= self._clock():
            logger.info("token_expired", sub=claims.sub, expired_at=claims.exp.isoformat())
            raise ExpiredToken("Token has expired")
        return claims

    def refresh(self, token: str) -> str:
        """
        Re-issue a valid token with the same subject and role.

        The presented token is not revoked and stays valid until its own
        expiry.

        Raises:
            TokenError: Any failure from `verify`
        """
        claims = self.verify(token)
        issued_at = self._clock()
        expire = issued_at + self._ttl
        # Second-resolution timestamps: keep the new expiry strictly later.
        if int(expire.timestamp()) <= int(claims.exp.timestamp()):
            expire = claims.exp + timedelta(seconds=1)
        logger.debug("token_refreshed", sub=claims.sub)
        return self._encode(claims.sub, claims.role, issued_at, expire)

    def _encode(self, sub: str, role: Role, issued_at: datetime, expire: datetime) -> str:
        to_encode = {
            "sub": sub,
            "role": role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
        }
        try:
            encoded_jwt = jwt.encode(to_encode, self._secret, algorithm=self._algorithm)
        except JOSEError as exc:
            logger.error("token_signing_failed", error=str(exc))
            raise TokenSigningError(str(exc)) from exc
        logger.debug("token_issued", sub=sub, expires_at=expire.isoformat())
        return encoded_jwt

    @staticmethod
    def _parse_claims(payload: dict[str, Any]) -> TokenClaims:
        iat = payload.get("iat")
        exp = payload.get("exp")
        if not isinstance(iat, int) or not isinstance(exp, int):
            raise InvalidToken("Token timestamps missing or not integers")
        try:
            return TokenClaims(
                sub=payload.get("sub"),
                role=payload.get("role"),
                iat=datetime.fromtimestamp(iat, tz=UTC),
                exp=datetime.fromtimestamp(exp, tz=UTC),
            )
        except ValidationError as exc:
            raise InvalidToken("Token claims are invalid") from exc
