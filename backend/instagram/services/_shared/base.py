# instagram/services/_shared/base.py
from __future__ import annotations

from collections.abc import Callable

from instagram.uow.base import UnitOfWork
from instagram.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

UowFactory = Callable[[], UnitOfWork]


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide read-write and read-only units of work.
    * Keep services orchestration-only, with no web or ORM leakage.

    Parameters
    ----------
    uow_factory:
        Builds the read-write unit of work. Defaults to
        :class:`~instagram.uow.SQLAlchemyUnitOfWork`.
    ro_uow_factory:
        Builds the read-only unit of work. Defaults to ``uow_factory`` when one
        is given, else :class:`~instagram.uow.SQLAlchemyReadOnlyUnitOfWork`.

    Notes
    -----
    Services never touch the global session; always go through a unit of work.
    """

    def __init__(
        self,
        *,
        uow_factory: UowFactory | None = None,
        ro_uow_factory: UowFactory | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._ro_uow_factory = ro_uow_factory or uow_factory

    def rw_uow(self) -> UnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: UnitOfWork
        """
        if self._uow_factory is not None:
            return self._uow_factory()
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> UnitOfWork:
        """
        Create a read-only Unit of Work.

        :returns: Read-only UoW instance.
        :rtype: UnitOfWork
        """
        if self._ro_uow_factory is not None:
            return self._ro_uow_factory()
        return SQLAlchemyReadOnlyUnitOfWork()
