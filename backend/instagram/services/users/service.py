# instagram/services/users/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from instagram.models.user import User
from instagram.services._shared.base import BaseService, UowFactory
from instagram.services._shared.errors import (
    FieldAlreadyExistsError,
    InvalidArgumentError,
    NotFoundError,
    violates,
)
from instagram.services._shared.ports import PasswordHasher

from .dto import UserDto

log = logging.getLogger(__name__)


def _field_conflict(exc: IntegrityError) -> FieldAlreadyExistsError | None:
    """Map a unique-constraint violation onto the conflicting field, if known."""
    if violates(exc, "uq_users_email", column="users.email"):
        return FieldAlreadyExistsError("email")
    if violates(exc, "uq_users_username", column="users.username"):
        return FieldAlreadyExistsError("username")
    return None


class UserService(BaseService):
    """
    Application service managing the identity record lifecycle.

    Responsibilities
    ----------------
    - Create users, enforcing email then username uniqueness.
    - Replace profile fields and re-hash the password on update.
    - Read, list and delete users, failing on unknown ids.

    Outputs are :class:`UserDto` projections whose ``password`` is ``None``.
    """

    def __init__(
        self,
        hasher: PasswordHasher,
        *,
        uow_factory: UowFactory | None = None,
        ro_uow_factory: UowFactory | None = None,
    ) -> None:
        super().__init__(uow_factory=uow_factory, ro_uow_factory=ro_uow_factory)
        self.hasher = hasher

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def create_user(self, dto: UserDto) -> UserDto:
        """
        Register a new identity record.

        :param dto: Input carrying the plaintext password; ``id`` is ignored.
        :type dto: UserDto
        :returns: Projection of the stored record with its generated id.
        :rtype: UserDto
        :raises FieldAlreadyExistsError: If the email (checked first) or the
            username is already taken.
        :raises InvalidArgumentError: If a field fails model validation.
        """
        with self.rw_uow() as uow:
            store = uow.users
            if store.exists_by_email(dto.email):
                raise FieldAlreadyExistsError("email")
            if store.exists_by_username(dto.username):
                raise FieldAlreadyExistsError("username")

            try:
                user = User(
                    full_name=dto.full_name,
                    username=dto.username,
                    email=dto.email,
                    password_hash=self.hasher.hash(dto.password),
                )
                store.save(user)
            except ValueError as exc:
                raise InvalidArgumentError(str(exc)) from exc
            except IntegrityError as exc:
                conflict = _field_conflict(exc)
                if conflict is None:
                    raise
                raise conflict from exc
            created = self._to_dto(user)

        log.info("user.created", extra={"user_id": created.id})
        return created

    def update_user(self, dto: UserDto | None) -> UserDto:
        """
        Replace the profile of an existing record and re-hash its password.

        Uniqueness is not re-checked against other records here; the store
        still rejects collisions on save, and the unit of work rolls back.

        :param dto: Full replacement, ``id`` required.
        :type dto: UserDto | None
        :returns: Projection of the updated record.
        :rtype: UserDto
        :raises InvalidArgumentError: If ``dto`` or ``dto.id`` is ``None``.
        :raises NotFoundError: If no record has ``dto.id``.
        :raises FieldAlreadyExistsError: If the new email or username belongs
            to another record.
        """
        if dto is None or dto.id is None:
            raise InvalidArgumentError("UserDto or UserDto.id must not be null")

        with self.rw_uow() as uow:
            user = uow.users.get(dto.id)
            if user is None:
                raise NotFoundError("User", dto.id)

            try:
                user.full_name = dto.full_name
                user.username = dto.username
                user.email = dto.email
                user.password_hash = self.hasher.hash(dto.password)
                uow.users.save(user)
            except ValueError as exc:
                raise InvalidArgumentError(str(exc)) from exc
            except IntegrityError as exc:
                conflict = _field_conflict(exc)
                if conflict is None:
                    raise
                raise conflict from exc
            updated = self._to_dto(user)

        log.info("user.updated", extra={"user_id": updated.id})
        return updated

    def delete_user(self, user_id: int) -> None:
        """
        Delete a record by id.

        :raises NotFoundError: If the id is unknown; nothing is deleted then.
        """
        with self.rw_uow() as uow:
            if not uow.users.exists_by_id(user_id):
                raise NotFoundError("User", user_id)
            uow.users.delete_by_id(user_id)

        log.info("user.deleted", extra={"user_id": user_id})

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def find_by_id(self, user_id: int) -> UserDto:
        """
        :raises NotFoundError: If the id is unknown.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return self._to_dto(user)

    def find_all(self) -> list[UserDto]:
        """Return every record in store order; empty list when there are none."""
        with self.ro_uow() as uow:
            return [self._to_dto(u) for u in uow.users.list_all()]

    # --------------------------------------------------------------------- #
    # Internal helpers
    # --------------------------------------------------------------------- #

    @staticmethod
    def _to_dto(user: User) -> UserDto:
        return UserDto(
            id=user.id,
            full_name=user.full_name,
            username=user.username,
            email=user.email,
        )
