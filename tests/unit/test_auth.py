"""
Unit tests for password hashing and JWT tokens.
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from jose import jwt

from shared.auth import (
    ExpiredToken,
    InvalidPasswordHash,
    InvalidToken,
    PasswordHasher,
    SignatureMismatch,
    TokenCodec,
)
from shared.errors import ConfigurationError
from shared.models.user import Role


SECRET = "unit-test-secret-key-at-least-32-chars!"
T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Settable clock for expiry tests."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def codec(clock: FakeClock) -> TokenCodec:
    return TokenCodec(secret=SECRET, ttl=timedelta(hours=1), clock=clock)


class TestPasswordHashing:
    """Tests for the Argon2 hasher."""

    def test_hash_is_argon2_phc_string(self, hasher: PasswordHasher) -> None:
        """Hash is an Argon2id PHC string, not the plaintext."""
        hashed = hasher.hash("correct horse")

        assert hashed != "correct horse"
        assert hashed.startswith("$argon2id$")

    def test_verify_correct_password(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("correct horse")

        assert hasher.verify("correct horse", hashed) is True

    def test_verify_wrong_password(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("correct horse")

        assert hasher.verify("battery staple", hashed) is False

    def test_same_password_different_salts(self, hasher: PasswordHasher) -> None:
        """Each hash gets its own salt."""
        first = hasher.hash("same-password")
        second = hasher.hash("same-password")

        assert first != second
        assert hasher.verify("same-password", first)
        assert hasher.verify("same-password", second)

    def test_malformed_hash_raises(self, hasher: PasswordHasher) -> None:
        """A corrupt stored hash is an error, not a failed match."""
        with pytest.raises(InvalidPasswordHash):
            hasher.verify("anything", "not-a-hash")

    def test_needs_rehash_after_cost_change(self, hasher: PasswordHasher) -> None:
        hashed = hasher.hash("password")
        stronger = PasswordHasher(time_cost=3, memory_cost=2048, parallelism=1)

        assert hasher.needs_rehash(hashed) is False
        assert stronger.needs_rehash(hashed) is True


class TestTokenIssue:
    """Tests for token creation."""

    def test_issue_round_trips_claims(self, codec: TokenCodec) -> None:
        user_id = uuid4()
        token = codec.issue(user_id, Role.TEACHER)

        claims = codec.verify(token)

        assert claims.sub == str(user_id)
        assert claims.role == Role.TEACHER
        assert claims.iat == T0
        assert claims.exp == T0 + timedelta(hours=1)

    def test_token_has_three_segments(self, codec: TokenCodec) -> None:
        token = codec.issue(uuid4(), Role.STUDENT)

        assert token.count(".") == 2

    def test_ttl_override(self, codec: TokenCodec) -> None:
        token = codec.issue(uuid4(), Role.STUDENT, ttl=timedelta(minutes=5))

        assert codec.verify(token).exp == T0 + timedelta(minutes=5)

    def test_empty_secret_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            TokenCodec(secret="", ttl=timedelta(hours=1))

    def test_non_positive_ttl_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            TokenCodec(secret=SECRET, ttl=timedelta(0))


class TestTokenVerify:
    """Tests for token verification failures."""

    def test_valid_one_second_before_expiry(self, codec: TokenCodec, clock: FakeClock) -> None:
        token = codec.issue(uuid4(), Role.STUDENT)
        clock.advance(timedelta(hours=1) - timedelta(seconds=1))

        assert codec.verify(token).role == Role.STUDENT

    def test_expired_exactly_at_expiry(self, codec: TokenCodec, clock: FakeClock) -> None:
        """exp == now counts as expired."""
        token = codec.issue(uuid4(), Role.STUDENT)
        clock.advance(timedelta(hours=1))

        with pytest.raises(ExpiredToken):
            codec.verify(token)

    def test_expired_after_expiry(self, codec: TokenCodec, clock: FakeClock) -> None:
        token = codec.issue(uuid4(), Role.STUDENT)
        clock.advance(timedelta(days=2))

        with pytest.raises(ExpiredToken):
            codec.verify(token)

    def test_tampered_signature(self, codec: TokenCodec) -> None:
        token = codec.issue(uuid4(), Role.STUDENT)
        head, payload, signature = token.split(".")
        forged = "B" if signature[0] == "A" else "A"
        tampered = f"{head}.{payload}.{forged}{signature[1:]}"

        with pytest.raises(SignatureMismatch):
            codec.verify(tampered)

    def test_other_secret_rejected(self, codec: TokenCodec, clock: FakeClock) -> None:
        other = TokenCodec(secret="another-secret-key-at-least-32-chars!", ttl=timedelta(hours=1), clock=clock)
        token = other.issue(uuid4(), Role.ADMIN)

        with pytest.raises(SignatureMismatch):
            codec.verify(token)

    def test_escalated_role_in_payload_rejected(self, codec: TokenCodec) -> None:
        """Swapping in a payload from another token breaks the signature."""
        student = codec.issue(uuid4(), Role.STUDENT)
        admin = codec.issue(uuid4(), Role.ADMIN)
        head, _, signature = student.split(".")
        _, admin_payload, _ = admin.split(".")

        with pytest.raises(SignatureMismatch):
            codec.verify(f"{head}.{admin_payload}.{signature}")

    @pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c", "a.b"])
    def test_malformed_token(self, codec: TokenCodec, token: str) -> None:
        with pytest.raises(InvalidToken):
            codec.verify(token)

    def test_missing_role_claim(self, codec: TokenCodec) -> None:
        """Correctly signed but incomplete claims are invalid."""
        exp = int((T0 + timedelta(hours=1)).timestamp())
        token = jwt.encode(
            {"sub": "user", "iat": int(T0.timestamp()), "exp": exp},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidToken):
            codec.verify(token)

    def test_unknown_role_claim(self, codec: TokenCodec) -> None:
        exp = int((T0 + timedelta(hours=1)).timestamp())
        token = jwt.encode(
            {"sub": "user", "role": "Superuser", "iat": int(T0.timestamp()), "exp": exp},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidToken):
            codec.verify(token)


class TestTokenRefresh:
    """Tests for token refresh."""

    def test_refresh_extends_expiry(self, codec: TokenCodec, clock: FakeClock) -> None:
        user_id = uuid4()
        token = codec.issue(user_id, Role.TEACHER)
        clock.advance(timedelta(minutes=30))

        refreshed = codec.verify(codec.refresh(token))

        assert refreshed.sub == str(user_id)
        assert refreshed.role == Role.TEACHER
        assert refreshed.exp == T0 + timedelta(minutes=90)

    def test_refresh_in_same_second_still_later(self, codec: TokenCodec) -> None:
        token = codec.issue(uuid4(), Role.STUDENT)

        original = codec.verify(token)
        refreshed = codec.verify(codec.refresh(token))

        assert refreshed.exp > original.exp

    def test_refresh_leaves_old_token_valid(self, codec: TokenCodec) -> None:
        token = codec.issue(uuid4(), Role.STUDENT)
        codec.refresh(token)

        assert codec.verify(token).role == Role.STUDENT

    def test_refresh_expired_token_fails(self, codec: TokenCodec, clock: FakeClock) -> None:
        token = codec.issue(uuid4(), Role.STUDENT)
        clock.advance(timedelta(hours=2))

        with pytest.raises(ExpiredToken):
            codec.refresh(token)
