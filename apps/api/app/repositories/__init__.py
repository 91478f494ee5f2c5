"""Repository exports."""

from .post import PostRepository
from .user import UserRepository

__all__ = ["PostRepository", "UserRepository"]
