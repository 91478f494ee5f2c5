"""Document models package."""

from .post import Post, PostAuthor
from .user import User

__all__ = ["Post", "PostAuthor", "User"]
