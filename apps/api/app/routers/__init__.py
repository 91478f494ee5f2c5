from . import health, install, login, posts, profile, registration, users_count  # noqa: F401

__all__ = ["health", "install", "login", "posts", "profile", "registration", "users_count"]
