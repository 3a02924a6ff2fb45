# instagram/services/auth/service.py
from __future__ import annotations

import logging
import secrets
from typing import NoReturn

from instagram.services._shared.base import BaseService, UowFactory
from instagram.services._shared.errors import AuthenticationError
from instagram.services._shared.ports import PasswordHasher, TokenCodec

from .dto import LoginIn, LoginOut

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authenticate credentials and issue session tokens.

    Unknown usernames and wrong passwords fail with the same
    :class:`AuthenticationError`; only the logs tell them apart.
    """

    def __init__(
        self,
        hasher: PasswordHasher,
        token_codec: TokenCodec,
        *,
        uow_factory: UowFactory | None = None,
        ro_uow_factory: UowFactory | None = None,
        dummy_hash: str | None = None,
    ) -> None:
        super().__init__(uow_factory=uow_factory, ro_uow_factory=ro_uow_factory)
        self.hasher = hasher
        self.token_codec = token_codec
        self._dummy_hash = dummy_hash

    def authenticate(self, dto: LoginIn) -> str:
        """
        Verify ``dto`` against the stored hash and issue a token.

        :param dto: Username and plaintext password.
        :type dto: LoginIn
        :returns: Signed token whose subject is the username.
        :rtype: str
        :raises AuthenticationError: If the user is unknown or the password
            does not match.
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(dto.username)
            if user is None:
                # Same hashing cost as a real check
                self.hasher.verify(self.dummy_hash, dto.password)
                self._reject(dto.username, "unknown_user")
            elif not self.hasher.verify(user.password_hash, dto.password):
                self._reject(dto.username, "bad_password")
            subject = user.username

        token = self.token_codec.issue(subject)
        log.info("auth.signed_in", extra={"username": subject})
        return token

    def sign_in(self, dto: LoginIn) -> LoginOut:
        """Authenticate and pair the token with the username it was issued for."""
        return LoginOut(username=dto.username, token=self.authenticate(dto))

    @property
    def dummy_hash(self) -> str:
        """Hash verified for unknown usernames; built on first use when not injected."""
        if self._dummy_hash is None:
            self._dummy_hash = self.hasher.hash(secrets.token_urlsafe(32))
        return self._dummy_hash

    @staticmethod
    def _reject(username: str, reason: str) -> NoReturn:
        log.info("auth.rejected", extra={"username": username, "reason": reason})
        raise AuthenticationError()
