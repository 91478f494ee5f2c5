"""Document store access helpers."""

from .session import (
    COUNTERS_COLLECTION,
    POSTS_COLLECTION,
    USERS_COLLECTION,
    create_database,
    ensure_indexes,
    get_db,
)

__all__ = [
    "COUNTERS_COLLECTION",
    "POSTS_COLLECTION",
    "USERS_COLLECTION",
    "create_database",
    "ensure_indexes",
    "get_db",
]
