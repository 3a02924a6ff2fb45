"""User repository: the SQLAlchemy credential store."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from instagram.models.user import User
from instagram.repositories.base import BaseRepository
from instagram.services._shared.ports import CredentialStore


class UserRepository(BaseRepository[User], CredentialStore):
    """Persistence-only repository for :class:`User`.

    Implements the :class:`~instagram.services._shared.ports.CredentialStore`
    port. It never hashes passwords or issues tokens, and never commits.
    """

    model = User

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == email.lower().strip()).limit(1)
        return self.session.execute(stmt).first() is not None

    def exists_by_username(self, username: str) -> bool:
        stmt = select(User.id).where(User.username == username.strip()).limit(1)
        return self.session.execute(stmt).first() is not None

    def exists_by_id(self, user_id: int) -> bool:
        return self.exists_by_pk(user_id)

    def list_all(self) -> list[User]:
        return self.list_ordered()

    # ---------------------------- Writes ----------------------------

    def save(self, user: User) -> User:
        """Insert or update ``user`` and flush so ``id`` is assigned.

        :raises sqlalchemy.exc.IntegrityError: On unique constraint violation.
        """
        return self.add(user)

    def delete_by_id(self, user_id: int) -> None:
        """Delete the row with ``user_id``; a missing row is a no-op."""
        user = self.get(user_id)
        if user is not None:
            self.delete(user)
