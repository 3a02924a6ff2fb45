"""
SQLAlchemy implementations of UnitOfWork for Flask.
"""

from __future__ import annotations

import logging
from contextlib import suppress

from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction, scoped_session

from instagram.core.extensions import db
from instagram.repositories import UserRepository
from instagram.uow.base import UnitOfWork

log = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """
    Read-write UoW using the Flask-scoped session.

    Commits when the block exits cleanly and rolls back otherwise; a failed
    commit is rolled back and re-raised.
    """

    def __init__(self, session: Session | scoped_session | None = None) -> None:
        self.session = session if session is not None else db.session
        self.users = UserRepository(session=self.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(UnitOfWork):
    """
    Read-only UoW that blocks writes and always rolls back what it owns.

    When no transaction is active it begins one, and on PostgreSQL/MySQL marks
    it ``READ ONLY``. When the session already has a transaction (autobegin, an
    outer test fixture) it attaches to it instead. In both cases ORM flushes and
    DML/DDL statements are rejected with ``RuntimeError`` while the scope is open.

    Parameters
    ----------
    enforce_db_readonly:
        Issue ``SET TRANSACTION READ ONLY`` on dialects that support it.
    """

    _WRITE_PREFIXES = (
        "insert",
        "update",
        "delete",
        "alter",
        "drop",
        "create",
        "replace",
    )
    _READONLY_DIALECTS = ("postgresql", "mysql", "mariadb")

    def __init__(
        self,
        session: Session | scoped_session | None = None,
        *,
        enforce_db_readonly: bool = True,
    ) -> None:
        self.session = session if session is not None else db.session
        self.users = UserRepository(session=self.session)
        self.enforce_db_readonly = enforce_db_readonly
        self._txn: SessionTransaction | None = None
        self._conn: Connection | None = None
        self._target: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        try:
            self._txn = self.session.begin()
        except InvalidRequestError:
            # Already inside a transaction: attach, guards only
            self._txn = None

        self._conn = self.session.connection()
        self._install_guards()

        if self._txn is not None and self.enforce_db_readonly:
            if self._conn.dialect.name in self._READONLY_DIALECTS:
                try:
                    self.session.execute(text("SET TRANSACTION READ ONLY"))
                except SQLAlchemyError as exc:
                    log.warning("SET TRANSACTION READ ONLY failed (%s); guards only.", exc)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._txn is not None:
                with suppress(SQLAlchemyError):
                    self._txn.rollback()
                self._txn = None
        finally:
            self._remove_guards()
            self._conn = None

    def commit(self) -> None:
        """
        :raises RuntimeError: always; the scope never persists anything.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    # ----------------------------- Guards -----------------------------

    def _before_flush(self, session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError("Read-only UnitOfWork: ORM flush blocked.")

    def _before_cursor_execute(
        self, conn, cursor, statement, parameters, context, executemany
    ) -> None:
        first = statement.lstrip().split(None, 1)[0].lower() if statement else ""
        if first.startswith(self._WRITE_PREFIXES):
            raise RuntimeError(f"Read-only UnitOfWork: SQL statement blocked: {first.upper()}")

    def _install_guards(self) -> None:
        target = self.session
        if isinstance(target, scoped_session):
            target = target()
        self._target = target
        event.listen(target, "before_flush", self._before_flush)
        event.listen(self._conn, "before_cursor_execute", self._before_cursor_execute)

    def _remove_guards(self) -> None:
        if self._target is not None:
            with suppress(InvalidRequestError):
                event.remove(self._target, "before_flush", self._before_flush)
            self._target = None
        if self._conn is not None:
            with suppress(InvalidRequestError):
                event.remove(self._conn, "before_cursor_execute", self._before_cursor_execute)
