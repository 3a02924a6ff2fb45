"""Authentication endpoints: sign-in and sign-up."""

from __future__ import annotations

from flask import Blueprint, request

from instagram.api import deps
from instagram.api.deps import json_response, timing
from instagram.schemas import LoginResponseSchema, LoginSchema, UserSchema, UserWriteSchema
from instagram.services.auth import LoginIn
from instagram.services.users import UserDto

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
login_response_schema = LoginResponseSchema()
signup_schema = UserWriteSchema()
user_schema = UserSchema()


@bp.post("/signin")
@timing
def signin():
    """Authenticate credentials and return ``{username, token}``."""

    data = login_schema.load(request.get_json())
    result = deps.build_auth_service().sign_in(LoginIn(**data))
    return json_response(login_response_schema.dump(result))


@bp.post("/signup")
@timing
def signup():
    """Register a new user and return its public representation."""

    data = signup_schema.load(request.get_json())
    user = deps.build_user_service().create_user(UserDto(**data))
    return json_response(user_schema.dump(user), status=201)
