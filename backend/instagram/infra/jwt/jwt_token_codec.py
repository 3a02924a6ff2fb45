# instagram/infra/jwt/jwt_token_codec.py
from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from instagram.services._shared.errors import TokenError
from instagram.services._shared.ports import TokenCodec

log = logging.getLogger(__name__)

# Minimum key length (bytes) per HMAC algorithm: the digest size
MIN_KEY_BYTES: dict[str, int] = {"HS256": 32, "HS384": 48, "HS512": 64}

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class TokenCodecConfig:
    """
    Signing configuration for :class:`JWTTokenCodec`.

    :param secret_key: Server-held symmetric key.
    :type secret_key: str | bytes
    :param algorithm: HMAC variant (``HS256``, ``HS384`` or ``HS512``).
    :type algorithm: str
    :param ttl: Fixed validity window of issued tokens.
    :type ttl: timedelta
    :raises ValueError: If the algorithm is unsupported, the key is shorter
        than the algorithm's digest, or the TTL is not positive.
    """

    secret_key: str | bytes = field(repr=False)
    algorithm: str = "HS512"
    ttl: timedelta = timedelta(hours=1)

    def __post_init__(self) -> None:
        minimum = MIN_KEY_BYTES.get(self.algorithm)
        if minimum is None:
            raise ValueError(
                f"Unsupported JWT algorithm {self.algorithm!r}; "
                f"expected one of {sorted(MIN_KEY_BYTES)}."
            )
        if len(self.key_bytes) < minimum:
            raise ValueError(
                f"JWT secret key must be at least {minimum} bytes for {self.algorithm}."
            )
        if self.ttl <= timedelta(0):
            raise ValueError("JWT token TTL must be positive.")

    @property
    def key_bytes(self) -> bytes:
        if isinstance(self.secret_key, bytes):
            return self.secret_key
        return self.secret_key.encode("utf-8")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> TokenCodecConfig:
        """Build the config from Flask-style keys (``JWT_SECRET_KEY`` and friends)."""
        ttl = config.get("JWT_ACCESS_TOKEN_EXPIRES", timedelta(hours=1))
        if isinstance(ttl, int | float):
            ttl = timedelta(seconds=ttl)
        return cls(
            secret_key=config.get("JWT_SECRET_KEY") or "",
            algorithm=str(config.get("JWT_ALGORITHM", "HS512")),
            ttl=ttl,
        )


class JWTTokenCodec(TokenCodec):
    """
    PyJWT adapter issuing HMAC-signed session tokens.

    Tokens carry ``sub`` (username), ``iat`` and ``exp``. The same key and
    algorithm are handed to ``flask-jwt-extended`` so its request guards accept
    them.
    """

    def __init__(
        self,
        config: TokenCodecConfig,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.config = config
        self._clock = clock

    def issue(self, subject: str) -> str:
        if not isinstance(subject, str) or not subject:
            raise ValueError("Token subject must be a non-empty string.")
        now = self._clock()
        payload = {"sub": subject, "iat": now, "exp": now + self.config.ttl}
        return jwt.encode(payload, self.config.key_bytes, algorithm=self.config.algorithm)

    def validate(self, token: object) -> bool:
        if not isinstance(token, str) or not token:
            return False
        try:
            self._decode(token)
        except TokenError as exc:
            log.debug("Token rejected: %s", exc)
            return False
        return True

    def subject_of(self, token: str) -> str:
        return str(self._decode(token)["sub"])

    def _decode(self, token: str) -> dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                self.config.key_bytes,
                algorithms=[self.config.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenError("Token has expired.") from exc
        except jwt.PyJWTError as exc:
            raise TokenError(f"Invalid token: {exc}") from exc
        # PyJWT checks ``exp`` against its own clock; honour the injected one too
        expires_at = datetime.fromtimestamp(int(claims["exp"]), tz=UTC)
        if self._clock() >= expires_at:
            raise TokenError("Token has expired.")
        return claims
