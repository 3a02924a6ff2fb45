"""Tests for the PyJWT token codec and its configuration."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from freezegun import freeze_time

from instagram.infra.jwt import JWTTokenCodec, TokenCodecConfig
from instagram.services._shared.errors import TokenError

SECRET = "k" * 64


@pytest.fixture()
def config() -> TokenCodecConfig:
    return TokenCodecConfig(secret_key=SECRET, algorithm="HS512", ttl=timedelta(hours=1))


@pytest.fixture()
def codec(config) -> JWTTokenCodec:
    return JWTTokenCodec(config)


class TestTokenCodecConfig:
    def test_rejects_key_shorter_than_digest(self):
        with pytest.raises(ValueError, match="at least 64 bytes"):
            TokenCodecConfig(secret_key="k" * 63, algorithm="HS512")

    def test_accepts_32_byte_key_for_hs256(self):
        cfg = TokenCodecConfig(secret_key="k" * 32, algorithm="HS256")
        assert cfg.key_bytes == b"k" * 32

    def test_rejects_non_hmac_algorithm(self):
        with pytest.raises(ValueError, match="Unsupported JWT algorithm"):
            TokenCodecConfig(secret_key=SECRET, algorithm="RS256")

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValueError, match="TTL"):
            TokenCodecConfig(secret_key=SECRET, ttl=timedelta(0))

    def test_from_mapping_reads_flask_keys(self):
        cfg = TokenCodecConfig.from_mapping(
            {
                "JWT_SECRET_KEY": SECRET,
                "JWT_ALGORITHM": "HS384",
                "JWT_ACCESS_TOKEN_EXPIRES": 120,
            }
        )
        assert cfg.algorithm == "HS384"
        assert cfg.ttl == timedelta(seconds=120)

    def test_repr_hides_secret(self, config):
        assert SECRET not in repr(config)


class TestJWTTokenCodec:
    def test_issued_token_is_valid_with_subject(self, codec):
        token = codec.issue("joao123")

        assert isinstance(token, str) and token
        assert codec.validate(token) is True
        assert codec.subject_of(token) == "joao123"

    def test_claims_carry_iat_and_exp_one_ttl_apart(self, codec):
        token = codec.issue("joao123")
        claims = jwt.decode(token, SECRET, algorithms=["HS512"])

        assert claims["sub"] == "joao123"
        assert claims["exp"] - claims["iat"] == 3600

    def test_empty_subject_is_rejected(self, codec):
        with pytest.raises(ValueError):
            codec.issue("")

    def test_expired_token_is_invalid(self, codec):
        """
        Given a token with iat = now - 2s and exp = now - 1s
        When it is validated
        Then validation fails and subject extraction raises.
        """
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "sub": "joao123",
                "iat": now - timedelta(seconds=2),
                "exp": now - timedelta(seconds=1),
            },
            SECRET,
            algorithm="HS512",
        )

        assert codec.validate(token) is False
        with pytest.raises(TokenError, match="expired"):
            codec.subject_of(token)

    def test_token_expires_after_ttl(self, codec):
        with freeze_time("2026-01-01 12:00:00") as frozen:
            token = codec.issue("joao123")
            frozen.tick(timedelta(minutes=59))
            assert codec.validate(token) is True
            frozen.tick(timedelta(minutes=1))
            assert codec.validate(token) is False

    @pytest.mark.parametrize(
        "value",
        ["", "not-a-jwt", "a.b.c", "Bearer xyz", None, 42, b"bytes"],
    )
    def test_malformed_input_is_invalid_without_raising(self, codec, value):
        assert codec.validate(value) is False

    def test_token_signed_with_other_key_is_invalid(self, codec):
        other = JWTTokenCodec(TokenCodecConfig(secret_key="x" * 64))
        token = other.issue("joao123")

        assert codec.validate(token) is False
        with pytest.raises(TokenError):
            codec.subject_of(token)

    def test_token_signed_with_other_algorithm_is_invalid(self, codec):
        token = jwt.encode(
            {"sub": "joao123", "iat": datetime.now(UTC), "exp": datetime.now(UTC) + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )
        assert codec.validate(token) is False

    def test_token_missing_subject_is_invalid(self, codec):
        now = datetime.now(UTC)
        token = jwt.encode({"iat": now, "exp": now + timedelta(hours=1)}, SECRET, algorithm="HS512")
        assert codec.validate(token) is False

    def test_injected_clock_controls_expiry(self, config):
        issued_at = datetime.now(UTC)
        clock = {"now": issued_at}
        codec = JWTTokenCodec(config, clock=lambda: clock["now"])
        token = codec.issue("joao123")

        clock["now"] = issued_at + timedelta(hours=1)
        assert codec.validate(token) is False
