"""
Password Hashing
================

Salted, memory-hard password hashing using Argon2id.

Version: 0.1.0
"""

from passlib.context import CryptContext


class PasswordHashingError(RuntimeError):
    """The hashing backend could not produce a hash."""


class InvalidPasswordHash(ValueError):
    """A stored hash string could not be parsed."""


class PasswordHasher:
    """
    Argon2 hasher with explicit cost parameters.

    The salt is generated per call and embedded, together with the cost
    parameters, in the returned PHC string, so `verify` needs nothing but
    the plaintext and the stored hash.
    """

    def __init__(
        self,
        time_cost: int = 2,
        memory_cost: int = 19456,
        parallelism: int = 1,
    ) -> None:
        self._context = CryptContext(
            schemes=["argon2"],
            deprecated="auto",
            argon2__time_cost=time_cost,
            argon2__memory_cost=memory_cost,
            argon2__parallelism=parallelism,
        )

    def hash(self, password: str) -> str:
        """
        Hash a password.

        Args:
            password: Plain text password

        Returns:
            str: Argon2 PHC string

        Raises:
            PasswordHashingError: If the backend fails (e.g. out of memory)
        """
        try:
            return self._context.hash(password)
        except (MemoryError, ValueError) as exc:
            raise PasswordHashingError(str(exc)) from exc

    def verify(self, password: str, hashed_password: str) -> bool:
        """
        Verify a password against its hash.

        Args:
            password: Plain text password to verify
            hashed_password: Argon2 hash to verify against

        Returns:
            bool: True if password matches hash, False on mismatch

        Raises:
            InvalidPasswordHash: If hashed_password is malformed
        """
        try:
            return self._context.verify(password, hashed_password)
        except (ValueError, TypeError) as exc:
            raise InvalidPasswordHash(str(exc)) from exc

    def needs_rehash(self, hashed_password: str) -> bool:
        """
        Check if a password hash was made with outdated cost parameters.

        Args:
            hashed_password: Existing password hash

        Returns:
            bool: True if password should be rehashed
        """
        return self._context.needs_update(hashed_password)

    def dummy_verify(self) -> bool:
        """
        Spend the time of one verification without a stored hash.

        Call when a login identifier matches no user. Always returns False.
        """
        return self._context.dummy_verify()
