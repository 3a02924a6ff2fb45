"""Tests for the ``flask users`` command group."""

from __future__ import annotations

from tests.factories.user import UserFactory

CREATE = [
    "users",
    "create",
    "--full-name",
    "João Silva",
    "--username",
    "joao123",
    "--email",
    "joao@email.com",
    "--password",
    "password123",
]


class TestUsersCli:
    def test_create_then_list(self, app):
        runner = app.test_cli_runner()

        result = runner.invoke(args=CREATE)
        assert result.exit_code == 0, result.output
        assert "Created user id=1 username=joao123" in result.output

        result = runner.invoke(args=["users", "list"])
        assert result.exit_code == 0, result.output
        assert "joao123" in result.output
        assert "joao@email.com" in result.output

    def test_duplicate_is_reported(self, app, db):
        UserFactory(email="joao@email.com")
        db.session.commit()

        result = app.test_cli_runner().invoke(args=CREATE)

        assert result.exit_code == 1
        assert "Email already in use." in result.output

    def test_list_empty(self, app):
        result = app.test_cli_runner().invoke(args=["users", "list"])
        assert "(no users)" in result.output
