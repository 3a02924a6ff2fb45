"""Password hashing adapter backed by :mod:`werkzeug.security`."""

from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from instagram.services._shared.ports import PasswordHasher


@dataclass(frozen=True, slots=True)
class WerkzeugPasswordHasher(PasswordHasher):
    """
    Salted, one-way password hashing.

    :param method: ``generate_password_hash`` method string, e.g. ``"scrypt"``
        or ``"pbkdf2:sha256:600000"``.
    :type method: str
    :param salt_length: Random salt length per hash.
    :type salt_length: int
    """

    method: str = "scrypt"
    salt_length: int = 16

    def hash(self, raw: str) -> str:
        """
        Hash a plaintext password.

        :param raw: Plain text password to hash.
        :type raw: str
        :raises ValueError: If ``raw`` is not a non-empty string.
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        return generate_password_hash(raw, method=self.method, salt_length=self.salt_length)

    def verify(self, hashed: str, raw: str) -> bool:
        """
        Verify a password against a stored hash.

        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not hashed or not isinstance(raw, str):
            return False
        # ``check_password_hash`` returns ``Any`` for type checkers
        return bool(check_password_hash(hashed, raw))
