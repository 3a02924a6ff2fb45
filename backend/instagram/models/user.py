"""User model: the identity record behind sign-up, sign-in and profiles."""

from __future__ import annotations

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from instagram.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Identity record of a registered account.

    Fields
    ------
    full_name : str
        Display name.
    username : str
        Public handle. Unique per system; used as the token subject.
    email : str
        Contact email. Unique per system, stored normalized (lowercase, trimmed).
    password_hash : str
        Output of the password hasher. Never serialized.
    created_at : datetime
        Creation timestamp (from mixin).
    updated_at : datetime
        Update timestamp (from mixin).

    Hashing is not done here: services hash through the ``PasswordHasher``
    port and assign ``password_hash`` directly.
    """

    __tablename__ = "users"

    # Columns
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    username: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(254), nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Constraints (names are matched by the service when mapping IntegrityError)
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
    )

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :returns: Normalized email (lowercased/trimmed).
        :rtype: str
        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username", "full_name")
    def _strip_required(self, key: str, value: str) -> str:
        """Trim ``username``/``full_name`` and reject blank values."""
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{key.replace('_', ' ').capitalize()} is required.")
        return value.strip()
