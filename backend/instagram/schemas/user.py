"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class UserWriteSchema(Schema):
    """Sign-up and update payload (camelCase keys on the wire).

    ``id`` may be ``null``: sign-up ignores it, update rejects it with 400.
    """

    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(allow_none=True, load_default=None)
    full_name = fields.String(
        required=True, data_key="fullName", validate=validate.Length(min=1, max=100)
    )
    username = fields.String(required=True, validate=validate.Length(min=1, max=50))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(
        required=True, load_only=True, validate=validate.Length(min=1, max=128)
    )


class UserSchema(Schema):
    """Public representation of a user; never carries a password."""

    id = fields.Integer(required=True)
    full_name = fields.String(required=True, data_key="fullName")
    username = fields.String(required=True)
    email = fields.Email(required=True)
