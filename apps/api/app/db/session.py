import logging

from fastapi import Request
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from app.core.config import Settings

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
POSTS_COLLECTION = "posts"
COUNTERS_COLLECTION = "counters"


def create_database(settings: Settings) -> Database:
    """Open a client for ``settings.mongodb_uri`` and return its database.

    The database named in the URI wins; ``mongodb_database`` is the fallback.
    """
    client: MongoClient = MongoClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        tz_aware=True,
    )
    return client.get_default_database(default=settings.mongodb_database)


def ensure_indexes(db: Database) -> None:
    """Create the indexes the repositories rely on."""
    db[USERS_COLLECTION].create_index([("email", ASCENDING)], unique=True, name="email_unique")
    db[USERS_COLLECTION].create_index([("is_admin", ASCENDING)], name="is_admin")
    db[POSTS_COLLECTION].create_index(
        [("created_at", DESCENDING), ("_id", DESCENDING)], name="created_at_desc"
    )
    db[POSTS_COLLECTION].create_index([("author_id", ASCENDING)], name="author_id")
    logger.debug("Indexes ensured on database %s", db.name)


def get_db(request: Request) -> Database:
    """Provide the application's database handle to a request."""
    return request.app.state.database
