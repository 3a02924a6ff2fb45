"""
instagram.services._shared.ports
================================

*Ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`credential_store`:
    :class:`~.CredentialStore`: persistence of identity records, plus the
    :class:`~.InMemoryCredentialStore` adapter used by tests and local wiring.
- :mod:`password_hasher`:
    :class:`~.PasswordHasher`: one-way hashing and verification of secrets.
- :mod:`token_codec`:
    :class:`~.TokenCodec`: issuing and validating signed session tokens, plus
    the deterministic :class:`~.StubTokenCodec` used in unit tests.

Concrete adapters (SQLAlchemy, werkzeug, PyJWT) live under ``instagram.infra``
and ``instagram.repositories``.
"""

from __future__ import annotations

from .credential_store import CredentialStore, InMemoryCredentialStore
from .password_hasher import PasswordHasher
from .token_codec import StubTokenCodec, TokenCodec

__all__ = [
    "CredentialStore",
    "InMemoryCredentialStore",
    "PasswordHasher",
    "TokenCodec",
    "StubTokenCodec",
]
