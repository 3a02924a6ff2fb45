"""Factory Boy definition for :class:`instagram.models.user.User`."""

from __future__ import annotations

import factory

from instagram.core.config import TestingConfig
from instagram.infra.security import WerkzeugPasswordHasher
from instagram.models.user import User
from tests.factories import BaseFactory

HASHER = WerkzeugPasswordHasher(method=TestingConfig.PASSWORD_HASH_METHOD)


class UserFactory(BaseFactory):
    """
    Build :class:`User` rows with a real password hash.

    Pass ``password="..."`` to choose the plaintext; it is hashed and never
    stored.
    """

    class Meta:
        model = User

    class Params:
        password = "Passw0rd!"

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Sequence(lambda n: f"user{n}")
    full_name = factory.Faker("name")
    password_hash = factory.LazyAttribute(lambda o: HASHER.hash(o.password))
