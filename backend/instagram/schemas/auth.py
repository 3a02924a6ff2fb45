"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, pre_load, validate


class LoginSchema(Schema):
    """Input payload for signing in."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(required=True, validate=validate.Length(min=1, max=50))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))

    @pre_load
    def _strip_username(self, data, **kwargs):
        if isinstance(data, dict) and isinstance(data.get("username"), str):
            data = {**data, "username": data["username"].strip()}
        return data


class LoginResponseSchema(Schema):
    """Sign-in response: exactly the username and its token."""

    username = fields.String(required=True)
    token = fields.String(required=True)
