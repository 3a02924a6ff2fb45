"""Pytest fixtures for the application, database and security collaborators.

Each test that needs the database gets a fresh application bound to an
in-memory SQLite database; the schema is created before the test and dropped
after it, so committed rows never leak between cases.
"""

from __future__ import annotations

import os

import pytest

from instagram.core.config import TestingConfig
from instagram.core.extensions import db as _db
from instagram.core.extensions import get_password_hasher, get_token_codec
from instagram.factory import create_app
from instagram.infra.security import WerkzeugPasswordHasher
from instagram.services._shared.ports import InMemoryCredentialStore
from instagram.uow import InMemoryUnitOfWork


@pytest.fixture()
def app():
    """Create a Flask application configured for testing.

    Yields
    ------
    flask.Flask
        Application with :class:`TestingConfig` applied, an app context pushed
        and the schema created.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app):
    """Database extension bound to the testing application."""
    return _db


@pytest.fixture()
def session(db):
    """Flask-scoped SQLAlchemy session used by repositories and factories."""
    return db.session


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def token_codec(app):
    """The PyJWT codec built from the application config."""
    return get_token_codec()


@pytest.fixture()
def auth_header(token_codec):
    """``Authorization`` header carrying a freshly issued bearer token."""
    return {"Authorization": f"Bearer {token_codec.issue('tester')}"}


# -- In-memory doubles ---------------------------------------------------------
@pytest.fixture()
def hasher():
    """Cheap werkzeug hasher so suites stay fast."""
    return WerkzeugPasswordHasher(method=TestingConfig.PASSWORD_HASH_METHOD)


@pytest.fixture()
def store():
    return InMemoryCredentialStore()


@pytest.fixture()
def memory_uow(store):
    """A single in-memory unit of work sharing ``store`` across calls."""
    return InMemoryUnitOfWork(store)


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the app's session ----------------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when the test uses the database."""
    from tests.factories import SQLAlchemySession

    if "app" in request.fixturenames:
        SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)


@pytest.fixture()
def app_hasher(app):
    """The password hasher bound to the application."""
    return get_password_hasher()
