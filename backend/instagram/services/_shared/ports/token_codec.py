from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

from instagram.services._shared.errors import TokenError


class TokenCodec(Protocol):
    """Port for issuing and validating signed, time-bounded session tokens."""

    def issue(self, subject: str) -> str:
        """Issue a token whose subject claim is ``subject``."""
        ...

    def validate(self, token: object) -> bool:
        """Return ``True`` only for well-formed, correctly signed, unexpired tokens.

        Never raises: untrusted input yields ``False``.
        """
        ...

    def subject_of(self, token: str) -> str:
        """Return the subject embedded in ``token``.

        :raises TokenError: When the token is not valid.
        """
        ...


class StubTokenCodec(TokenCodec):
    """Deterministic token codec used in unit tests."""

    def __init__(self, ttl: timedelta = timedelta(hours=1)) -> None:
        self._now = datetime.now(tz=UTC)
        self._ttl = ttl
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def issue(self, subject: str) -> str:
        if not subject:
            raise ValueError("Token subject must be a non-empty string.")
        self._seq += 1
        token = f"token.{subject}.{self._seq}"
        self._issued[token] = {"sub": subject, "exp": self._now + self._ttl}
        return token

    def validate(self, token: object) -> bool:
        if not isinstance(token, str) or token not in self._issued:
            return False
        return datetime.now(tz=UTC) < self._issued[token]["exp"]

    def subject_of(self, token: str) -> str:
        if not self.validate(token):
            raise TokenError("Invalid token.")
        return str(self._issued[token]["sub"])

    @property
    def issued(self) -> list[str]:
        """Tokens issued so far, oldest first."""
        return list(self._issued)
