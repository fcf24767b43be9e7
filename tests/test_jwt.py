"""
Tests for token issuance and validation, including simulated clock advance.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from auth.errors import Expired, InvalidSignature, Malformed, SigningError
from auth.jwt import TokenClaims, TokenService

SECRET = "unit-test-secret-key-0123456789abcdef"
T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(T0)


@pytest.fixture
def tokens(clock):
    return TokenService(SECRET, clock=clock)


class TestIssue:
    def test_round_trip_claims(self, tokens):
        token = tokens.issue("3f1c0d8e-0000-4000-8000-000000000001", "ana@x.com")
        claims = tokens.validate(token)
        assert claims == TokenClaims(user_id="3f1c0d8e-0000-4000-8000-000000000001", email="ana@x.com")

    def test_expires_exactly_24h_after_issue(self, tokens):
        token = tokens.issue("u1", "ana@x.com")
        payload = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
        assert payload["iat"] == int(T0.timestamp())
        assert payload["exp"] - payload["iat"] == 24 * 60 * 60

    def test_empty_secret_cannot_sign(self, clock):
        with pytest.raises(SigningError):
            TokenService("", clock=clock).issue("u1", "ana@x.com")

    def test_repr_hides_secret(self, tokens):
        assert SECRET not in repr(tokens)


class TestValidate:
    def test_expired_after_window(self, tokens, clock):
        token = tokens.issue("u1", "ana@x.com")
        clock.advance(hours=25)
        with pytest.raises(Expired):
            tokens.validate(token)

    def test_expired_exactly_at_boundary(self, tokens, clock):
        token = tokens.issue("u1", "ana@x.com")
        clock.advance(hours=24)
        with pytest.raises(Expired):
            tokens.validate(token)

    def test_valid_just_before_boundary(self, tokens, clock):
        token = tokens.issue("u1", "ana@x.com")
        clock.advance(hours=23, minutes=59, seconds=59)
        assert tokens.validate(token).user_id == "u1"

    def test_wrong_secret_is_invalid_signature(self, tokens, clock):
        other = TokenService("another-secret-key-0123456789abcdef", clock=clock)
        with pytest.raises(InvalidSignature):
            tokens.validate(other.issue("u1", "ana@x.com"))

    def test_tampered_payload_is_invalid_signature(self, tokens):
        header, _, signature = tokens.issue("u1", "ana@x.com").split(".")
        forged = jwt.encode(
            {"user_id": "u2", "email": "eve@x.com", "iat": 0, "exp": 2**31},
            "attacker-secret-0123456789abcdefghij",
            algorithm="HS256",
        ).split(".")[1]
        with pytest.raises(InvalidSignature):
            tokens.validate(f"{header}.{forged}.{signature}")

    @pytest.mark.parametrize("token", ["", "abc", "a.b.c", "not a token at all"])
    def test_garbage_is_malformed(self, tokens, token):
        with pytest.raises(Malformed):
            tokens.validate(token)

    def test_missing_claim_is_malformed(self, tokens):
        token = jwt.encode({"user_id": "u1", "exp": 2**31, "iat": 0}, SECRET, algorithm="HS256")
        with pytest.raises(Malformed):
            tokens.validate(token)

    def test_other_algorithm_rejected(self, tokens):
        token = jwt.encode(
            {"user_id": "u1", "email": "a@x.com", "iat": 0, "exp": 2**31},
            SECRET,
            algorithm="HS512",
        )
        with pytest.raises(Malformed):
            tokens.validate(token)
