"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between repositories, adapters and
application services. Translation to HTTP problems (RFC 7807) happens in
``instagram/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str, *, column: str | None = None) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL includes the constraint name in the error message; SQLite only
    reports ``table.column``, so ``column`` is matched as a fallback.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The database constraint to match (e.g., ``'uq_users_email'``).
    column : str | None
        Optional ``table.column`` marker (e.g., ``'users.email'``).

    Returns
    -------
    bool
        True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else str(exc).lower()
    if constraint_name.lower() in message:
        return True
    return column is not None and column.lower() in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The Flask error layer translates them to ``APIError`` responses.
    """


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class InvalidArgumentError(ServiceError):
    """Raised when a caller omits a required argument (e.g. update without id)."""


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the store.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier that was looked up.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found with id: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return self.detail


class FieldAlreadyExistsError(ConflictError):
    """
    Uniqueness violation on a single field of an identity record.

    :param field: Conflicting field (``"email"`` or ``"username"``).
    :type field: str
    """

    def __init__(self, field: str, *, entity: str = "User") -> None:
        self.field = field
        super().__init__(entity, f"{field.capitalize()} already in use.")


class AuthenticationError(ServiceError):
    """
    Raised when login credentials do not match a stored identity.

    The message never reveals whether the username or the password was wrong.
    """

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class TokenError(ServiceError):
    """Raised when a token cannot be decoded (bad structure, signature or expiry)."""
