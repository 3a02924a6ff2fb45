"""Tests for the User model."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from instagram.models.user import User


def _user(**overrides) -> User:
    fields = {
        "full_name": "Alice Liddell",
        "username": "alice",
        "email": "alice@example.com",
        "password_hash": "pbkdf2:sha256:1000$salt$hash",
    }
    fields.update(overrides)
    return User(**fields)


class TestUser:
    def test_email_is_normalized(self):
        u = _user(email="  Alice@Example.COM ")
        assert u.email == "alice@example.com"

    @pytest.mark.parametrize("email", ["", "no-at-sign", "a@nodot"])
    def test_invalid_email_is_rejected(self, email):
        with pytest.raises(ValueError):
            _user(email=email)

    @pytest.mark.parametrize("field", ["username", "full_name"])
    def test_blank_required_text_is_rejected(self, field):
        with pytest.raises(ValueError, match="is required"):
            _user(**{field: "   "})

    def test_username_is_trimmed(self):
        assert _user(username=" alice ").username == "alice"

    def test_repr_shows_id(self, session):
        u = _user()
        session.add(u)
        session.flush()
        assert repr(u) == f"<User id={u.id}>"

    def test_timestamps_filled_by_database(self, session):
        u = _user()
        session.add(u)
        session.commit()
        assert u.created_at is not None
        assert u.updated_at is not None

    def test_email_unique(self, session):
        session.add(_user())
        session.commit()

        session.add(_user(username="alice2", email="ALICE@example.com"))
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    def test_username_unique(self, session):
        session.add(_user())
        session.commit()

        session.add(_user(email="other@example.com"))
        with pytest.raises(IntegrityError):
            session.commit()
        session.rollback()

    def test_password_hash_is_the_only_secret_column(self):
        columns = set(User.__table__.columns.keys())
        assert "password_hash" in columns
        assert "password" not in columns
