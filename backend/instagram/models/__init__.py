from instagram.models.user import User

__all__ = ["User"]
