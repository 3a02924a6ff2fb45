from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for one-way password hashing.

    Implementations may salt per record, so callers MUST use :meth:`verify`
    instead of re-hashing and comparing strings.
    """

    def hash(self, raw: str) -> str:
        """Return a storable hash of ``raw``."""
        ...

    def verify(self, hashed: str, raw: str) -> bool:
        """Return ``True`` when ``raw`` matches ``hashed``."""
        ...
