"""DTOs for AuthService."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LoginIn:
    """Login credential; transient and never persisted."""

    username: str
    password: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Successful sign-in.

    :param username: Subject the token was issued for.
    :param token: Signed session token.
    """

    username: str
    token: str
