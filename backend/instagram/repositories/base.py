"""Generic repository base for SQLAlchemy 2.x.

Persistence-only concerns shared by repositories:

- Session resolution (explicit unit-of-work session or the Flask-scoped one).
- Primary-key based lookups with a deterministic listing order.
- No business logic, no commit/rollback: units of work own transactions.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar, cast

from sqlalchemy import select
from sqlalchemy.orm import InstrumentedAttribute, Session

from instagram.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Generic, persistence-only repository for a single aggregate.

    Subclasses MUST define ``model``; the primary key is ``model.id``.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """Initialise the repository with an optional SQLAlchemy session.

        :param session: Session shared across the unit-of-work scope. When
            omitted the Flask-scoped ``db.session`` is used.
        :type session: :class:`sqlalchemy.orm.Session` | None
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, else the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Extensibility ----------------------------

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        """Return the model's primary-key attribute (``model.id``)."""
        pk = getattr(self.model, "id", None)
        if pk is None:
            raise RuntimeError(f"{self.model.__name__} exposes no 'id' attribute.")
        return cast(InstrumentedAttribute[Any], pk)

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage a new entity and flush so the primary key is materialized.

        :param instance: New entity instance.
        :returns: The same instance after ``flush()``.
        """
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        """Retrieve a single entity by primary key, or ``None``."""
        stmt = select(self.model).where(self._pk_attr() == entity_id)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def exists_by_pk(self, entity_id: Any) -> bool:
        stmt = select(self._pk_attr()).where(self._pk_attr() == entity_id).limit(1)
        return self.session.execute(stmt).first() is not None

    def delete(self, instance: E) -> None:
        """Delete an entity and flush the change."""
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        """Flush pending changes to the database without committing."""
        self.session.flush()

    def list_ordered(self) -> list[E]:
        """Return every row ordered by ascending primary key."""
        stmt = select(self.model).order_by(self._pk_attr().asc())
        return cast(list[E], list(self.session.execute(stmt).scalars().all()))
