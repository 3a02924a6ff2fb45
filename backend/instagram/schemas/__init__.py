from instagram.schemas.auth import LoginResponseSchema, LoginSchema
from instagram.schemas.user import UserSchema, UserWriteSchema

__all__ = ["LoginResponseSchema", "LoginSchema", "UserSchema", "UserWriteSchema"]
