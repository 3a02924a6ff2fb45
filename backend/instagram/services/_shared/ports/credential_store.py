from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

from instagram.services._shared.errors import FieldAlreadyExistsError

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from instagram.models.user import User

# Mutable profile fields captured by snapshots
_SNAPSHOT_FIELDS = ("full_name", "username", "email", "password_hash")

Snapshot = dict[int, tuple["User", dict[str, Any]]]


class CredentialStore(Protocol):
    """
    Persistence port for identity records.

    Lookups return ``None`` when nothing matches; ``save`` assigns the
    surrogate id on first insert. Implementations never commit: the unit of
    work owning the store decides transaction boundaries.
    """

    def get(self, user_id: int) -> User | None: ...

    def get_by_username(self, username: str) -> User | None: ...

    def exists_by_email(self, email: str) -> bool: ...

    def exists_by_username(self, username: str) -> bool: ...

    def exists_by_id(self, user_id: int) -> bool: ...

    def save(self, user: User) -> User: ...

    def delete_by_id(self, user_id: int) -> None: ...

    def list_all(self) -> Sequence[User]: ...


class InMemoryCredentialStore(CredentialStore):
    """
    Dict-backed credential store preserving insertion order.

    Emails are compared trimmed and lowercased, matching the normalisation
    applied by the :class:`~instagram.models.user.User` model.

    Like the unique constraints of the SQL schema, ``save`` rejects a record
    whose email or username belongs to another row.

    .. note::
       Uses a threading lock so ``save`` assigns ids atomically.
    """

    def __init__(self, users: Sequence[User] = ()) -> None:
        self._rows: dict[int, User] = {}
        self._seq = 0
        self._lock = threading.Lock()
        for user in users:
            self.save(user)

    # ------------------------- lookups -------------------------

    def get(self, user_id: int) -> User | None:
        return self._rows.get(user_id)

    def get_by_username(self, username: str) -> User | None:
        needle = username.strip()
        return next((u for u in self._rows.values() if u.username == needle), None)

    def exists_by_email(self, email: str) -> bool:
        needle = email.strip().lower()
        return any(u.email == needle for u in self._rows.values())

    def exists_by_username(self, username: str) -> bool:
        return self.get_by_username(username) is not None

    def exists_by_id(self, user_id: int) -> bool:
        return user_id in self._rows

    def list_all(self) -> list[User]:
        return list(self._rows.values())

    # ------------------------- writes -------------------------

    def save(self, user: User) -> User:
        """
        Insert or replace ``user``, assigning an id on first insert.

        :raises FieldAlreadyExistsError: If another row holds the same email
            (checked first) or username.
        """
        with self._lock:
            others = [u for uid, u in self._rows.items() if uid != user.id]
            if any(u.email == user.email for u in others):
                raise FieldAlreadyExistsError("email")
            if any(u.username == user.username for u in others):
                raise FieldAlreadyExistsError("username")
            if user.id is None:
                self._seq += 1
                user.id = self._seq
            else:
                self._seq = max(self._seq, user.id)
            self._rows[user.id] = user
        return user

    def delete_by_id(self, user_id: int) -> None:
        with self._lock:
            self._rows.pop(user_id, None)

    # ------------------------- snapshots -------------------------

    def snapshot(self) -> Snapshot:
        """Capture the rows and their field values for a later :meth:`restore`."""
        with self._lock:
            return {
                uid: (user, {name: getattr(user, name) for name in _SNAPSHOT_FIELDS})
                for uid, user in self._rows.items()
            }

    def restore(self, snapshot: Snapshot) -> None:
        """Put back the rows of ``snapshot``, undoing in-place edits."""
        with self._lock:
            for user, values in snapshot.values():
                for name, value in values.items():
                    setattr(user, name, value)
            self._rows = {uid: user for uid, (user, _) in snapshot.items()}

    def __len__(self) -> int:
        return len(self._rows)
