from instagram.uow.base import UnitOfWork
from instagram.uow.memory import InMemoryUnitOfWork
from instagram.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

__all__ = [
    "InMemoryUnitOfWork",
    "SQLAlchemyReadOnlyUnitOfWork",
    "SQLAlchemyUnitOfWork",
    "UnitOfWork",
]
