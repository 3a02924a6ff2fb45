from .dto import UserDto
from .service import UserService

__all__ = ["UserDto", "UserService"]
