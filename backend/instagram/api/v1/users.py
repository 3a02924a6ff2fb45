"""User endpoints (bearer token required)."""

from __future__ import annotations

from flask import Blueprint, request

from instagram.api import deps
from instagram.api.deps import json_response, require_auth, text_response, timing
from instagram.schemas import UserSchema, UserWriteSchema
from instagram.services.users import UserDto

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
user_update_schema = UserWriteSchema()


@bp.get("")
@require_auth
@timing
def list_users():
    """Return every user, ordered by id."""

    users = deps.build_user_service().find_all()
    return json_response(user_list_schema.dump(users))


@bp.get("/<int:user_id>")
@require_auth
@timing
def get_user(user_id: int):
    """Return a single user."""

    user = deps.build_user_service().find_by_id(user_id)
    return json_response(user_schema.dump(user))


@bp.put("")
@require_auth
@timing
def update_user():
    """Replace a user's profile; the id travels in the body."""

    data = user_update_schema.load(request.get_json())
    user = deps.build_user_service().update_user(UserDto(**data))
    return json_response(user_schema.dump(user))


@bp.delete("/<int:user_id>")
@require_auth
@timing
def delete_user(user_id: int):
    """Delete a user."""

    deps.build_user_service().delete_user(user_id)
    return text_response("user was deleted!")
