from instagram.repositories.base import BaseRepository
from instagram.repositories.user import UserRepository

__all__ = ["BaseRepository", "UserRepository"]
