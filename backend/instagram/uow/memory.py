"""
In-memory UnitOfWork over an :class:`InMemoryCredentialStore`.
"""

from __future__ import annotations

from instagram.services._shared.ports import InMemoryCredentialStore
from instagram.services._shared.ports.credential_store import Snapshot
from instagram.uow.base import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """
    UoW wrapping a shared in-memory store.

    The store applies writes immediately. Entering takes a snapshot of the
    store and ``rollback`` restores it, so a failed command leaves no partial
    edits behind. ``commit`` only drops the snapshot. Both count their calls.
    Reuse one instance (or one store) across calls to share state.

    Stores other than :class:`InMemoryCredentialStore` (e.g. call-recording
    doubles) are used as-is, without snapshots.
    """

    def __init__(self, store: InMemoryCredentialStore | None = None) -> None:
        self.users = store if store is not None else InMemoryCredentialStore()
        self.committed = 0
        self.rolled_back = 0
        self._snapshot: Snapshot | None = None

    def __enter__(self) -> InMemoryUnitOfWork:
        if isinstance(self.users, InMemoryCredentialStore):
            self._snapshot = self.users.snapshot()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()

    def commit(self) -> None:
        self.committed += 1
        self._snapshot = None

    def rollback(self) -> None:
        self.rolled_back += 1
        if self._snapshot is not None:
            self.users.restore(self._snapshot)
            self._snapshot = None
