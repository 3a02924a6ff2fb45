"""
DTOs for UserService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UserDto:
    """
    Identity transfer object, used both as input and as projection.

    :param id: Surrogate id; ``None`` on create.
    :type id: int | None
    :param full_name: Display name.
    :type full_name: str
    :param username: Unique public handle.
    :type username: str
    :param email: Unique contact email.
    :type email: str
    :param password: Plaintext password on input; always ``None`` on output.
    :type password: str | None
    """

    id: int | None
    full_name: str
    username: str
    email: str
    password: str | None = None
