"""Tests for the SQLAlchemy credential store."""

from __future__ import annotations

import pytest

from instagram.models.user import User
from instagram.repositories import UserRepository
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session) -> UserRepository:
    return UserRepository(session=session)


class TestUserRepository:
    def test_save_assigns_id(self, repo, faker):
        user = User(
            full_name=faker.name(),
            username="newbie",
            email=faker.email(),
            password_hash="hash",
        )
        assert user.id is None

        saved = repo.save(user)

        assert saved is user
        assert isinstance(user.id, int)

    def test_get_returns_row_or_none(self, repo):
        user = UserFactory()
        assert repo.get(user.id) is user
        assert repo.get(user.id + 1000) is None

    def test_get_by_username(self, repo):
        user = UserFactory(username="joao123")
        assert repo.get_by_username("joao123") is user
        assert repo.get_by_username("nobody") is None

    def test_get_by_email_is_case_insensitive(self, repo):
        user = UserFactory(email="joao@email.com")
        assert repo.get_by_email(" JOAO@email.com ") is user

    def test_exists_by_email(self, repo):
        UserFactory(email="joao@email.com")
        assert repo.exists_by_email("Joao@Email.com") is True
        assert repo.exists_by_email("maria@email.com") is False

    def test_exists_by_username(self, repo):
        UserFactory(username="joao123")
        assert repo.exists_by_username("joao123") is True
        assert repo.exists_by_username("maria") is False

    def test_username_lookups_trim_input(self, repo):
        user = UserFactory(username="joao123")
        assert repo.get_by_username(" joao123 ") is user
        assert repo.exists_by_username("joao123 ") is True

    def test_exists_by_id(self, repo):
        user = UserFactory()
        assert repo.exists_by_id(user.id) is True
        assert repo.exists_by_id(user.id + 1) is False

    def test_list_all_orders_by_id(self, repo):
        users = UserFactory.create_batch(3)
        assert [u.id for u in repo.list_all()] == sorted(u.id for u in users)

    def test_list_all_empty(self, repo):
        assert repo.list_all() == []

    def test_delete_by_id(self, repo):
        user = UserFactory()
        user_id = user.id

        repo.delete_by_id(user_id)

        assert repo.exists_by_id(user_id) is False
        assert repo.get(user_id) is None

    def test_delete_by_id_missing_is_noop(self, repo):
        UserFactory()
        repo.delete_by_id(9999)
        assert len(repo.list_all()) == 1

    def test_falls_back_to_flask_session(self, app, session):
        user = UserFactory()
        assert UserRepository().get(user.id) is user
