"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING, cast

from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from instagram.services._shared.ports import PasswordHasher, TokenCodec

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()

TOKEN_CODEC_KEY = "token_codec"
PASSWORD_HASHER_KEY = "password_hasher"
DUMMY_HASH_KEY = "password_hasher.dummy_hash"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT and the security collaborators.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`instagram.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Raises
    ------
    ValueError
        If ``JWT_SECRET_KEY`` is too short for ``JWT_ALGORITHM``.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from instagram import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    # Adapters import the service layer, which imports models; keep them lazy
    from instagram.infra.jwt.jwt_token_codec import JWTTokenCodec, TokenCodecConfig
    from instagram.infra.security.werkzeug_hasher import WerkzeugPasswordHasher

    codec_cfg = TokenCodecConfig.from_mapping(app.config)
    app.extensions[TOKEN_CODEC_KEY] = JWTTokenCodec(codec_cfg)
    hasher = WerkzeugPasswordHasher(method=app.config.get("PASSWORD_HASH_METHOD", "scrypt"))
    app.extensions[PASSWORD_HASHER_KEY] = hasher
    # Checked in place of a stored hash when the username is unknown
    app.extensions[DUMMY_HASH_KEY] = hasher.hash(secrets.token_urlsafe(32))


def get_token_codec() -> TokenCodec:
    """Return the token codec bound to the current application."""
    codec = current_app.extensions.get(TOKEN_CODEC_KEY)
    if codec is None:
        raise RuntimeError("Token codec is not initialized. Call init_app() first.")
    return cast("TokenCodec", codec)


def get_password_hasher() -> PasswordHasher:
    """Return the password hasher bound to the current application."""
    hasher = current_app.extensions.get(PASSWORD_HASHER_KEY)
    if hasher is None:
        raise RuntimeError("Password hasher is not initialized. Call init_app() first.")
    return cast("PasswordHasher", hasher)


def get_dummy_password_hash() -> str:
    """Return a throwaway hash produced by the app's password hasher."""
    dummy = current_app.extensions.get(DUMMY_HASH_KEY)
    if dummy is None:
        raise RuntimeError("Password hasher is not initialized. Call init_app() first.")
    return cast(str, dummy)
