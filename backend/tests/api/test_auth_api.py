"""Blueprint tests for /api/v1/auth with the services stubbed out."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from instagram.api import deps
from instagram.services._shared.errors import AuthenticationError, FieldAlreadyExistsError
from instagram.services.auth import LoginIn, LoginOut
from instagram.services.users import UserDto
from tests.helpers.utils import problem, user_payload

SIGNIN = "/api/v1/auth/signin"
SIGNUP = "/api/v1/auth/signup"


@pytest.fixture()
def auth_service(monkeypatch):
    service = MagicMock()
    monkeypatch.setattr(deps, "build_auth_service", lambda: service)
    return service


@pytest.fixture()
def user_service(monkeypatch):
    service = MagicMock()
    monkeypatch.setattr(deps, "build_user_service", lambda: service)
    return service


class TestSignin:
    def test_returns_exactly_username_and_token(self, client, auth_service):
        auth_service.sign_in.return_value = LoginOut(username="joao123", token="tok")

        resp = client.post(SIGNIN, json={"username": "joao123", "password": "password123"})

        assert resp.status_code == 200
        assert resp.get_json() == {"username": "joao123", "token": "tok"}
        auth_service.sign_in.assert_called_once_with(
            LoginIn(username="joao123", password="password123")
        )

    def test_username_is_trimmed_before_sign_in(self, client, auth_service):
        auth_service.sign_in.return_value = LoginOut(username="joao123", token="tok")

        client.post(SIGNIN, json={"username": "  joao123 ", "password": "password123"})

        auth_service.sign_in.assert_called_once_with(
            LoginIn(username="joao123", password="password123")
        )

    def test_bad_credentials_is_401_problem(self, client, auth_service):
        auth_service.sign_in.side_effect = AuthenticationError()

        resp = client.post(SIGNIN, json={"username": "joao123", "password": "nope"})

        assert resp.status_code == 401
        body = problem(resp)
        assert body["detail"] == "Invalid credentials"
        assert body["code"] == "unauthorized"

    def test_missing_field_is_422(self, client, auth_service):
        resp = client.post(SIGNIN, json={"username": "joao123"})

        assert resp.status_code == 422
        assert "password" in problem(resp)["details"]["errors"]
        auth_service.sign_in.assert_not_called()

    def test_malformed_json_is_400(self, client, auth_service):
        resp = client.post(SIGNIN, data="{not json", content_type="application/json")

        assert resp.status_code == 400
        problem(resp)

    def test_non_json_body_is_415(self, client, auth_service):
        resp = client.post(SIGNIN, data="username=joao", content_type="text/plain")

        assert resp.status_code == 415
        problem(resp)


class TestSignup:
    def test_created_user_has_no_password(self, client, user_service):
        user_service.create_user.return_value = UserDto(
            id=1, full_name="João Silva", username="joao123", email="joao@email.com"
        )

        resp = client.post(SIGNUP, json=user_payload())

        assert resp.status_code == 201
        assert resp.get_json() == {
            "id": 1,
            "fullName": "João Silva",
            "username": "joao123",
            "email": "joao@email.com",
        }
        user_service.create_user.assert_called_once_with(
            UserDto(
                id=None,
                full_name="João Silva",
                username="joao123",
                email="joao@email.com",
                password="password123",
            )
        )

    @pytest.mark.parametrize("field", ["email", "username"])
    def test_conflict_is_409_with_field(self, client, user_service, field):
        user_service.create_user.side_effect = FieldAlreadyExistsError(field)

        resp = client.post(SIGNUP, json=user_payload())

        assert resp.status_code == 409
        body = problem(resp)
        assert body["detail"] == f"{field.capitalize()} already in use."
        assert body["details"] == {"field": field}

    def test_invalid_email_is_422(self, client, user_service):
        resp = client.post(SIGNUP, json=user_payload(email="nope"))

        assert resp.status_code == 422
        assert "email" in problem(resp)["details"]["errors"]

    def test_unknown_fields_are_ignored(self, client, user_service):
        user_service.create_user.return_value = UserDto(
            id=1, full_name="João Silva", username="joao123", email="joao@email.com"
        )

        resp = client.post(SIGNUP, json=user_payload(bio="hi"))

        assert resp.status_code == 201

    def test_response_echoes_request_id(self, client, user_service):
        user_service.create_user.side_effect = FieldAlreadyExistsError("email")

        resp = client.post(SIGNUP, json=user_payload(), headers={"X-Request-ID": "req-123"})

        assert resp.headers["X-Request-ID"] == "req-123"
        assert problem(resp)["request_id"] == "req-123"
