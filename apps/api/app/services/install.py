"""Store bootstrap: wipe accounts and posts, then seed a root admin."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pymongo.database import Database

from app.core.config import Settings
from app.core.security import hash_password
from app.models.user import User
from app.repositories.base import parse_object_id
from app.repositories.post import PostRepository
from app.repositories.user import UserRepository

logger = logging.getLogger(__name__)

SAMPLE_POST_TITLE = "Sample post"
SAMPLE_POST_BODY = "This post was created by the installer."


@dataclass
class InstallReport:
    root_user: User
    posts_created: int


def install(db: Database, settings: Settings) -> InstallReport:
    users = UserRepository()
    posts = PostRepository()

    removed_users = users.delete_all(db)
    removed_posts = posts.delete_all(db)
    logger.warning(
        "Install reset the store: removed %d users and %d posts", removed_users, removed_posts
    )

    root = users.create(
        db,
        name=settings.install_admin_name,
        email=settings.install_admin_email,
        password_hash=hash_password(
            settings.install_admin_password, rounds=settings.bcrypt_rounds
        ),
        is_admin=True,
    )
    users.reset_admin_counter(db, 1)

    author_id = parse_object_id(root.id)
    for index in range(settings.install_sample_posts):
        posts.create(
            db,
            author_id=author_id,
            title=f"{SAMPLE_POST_TITLE} {index + 1}",
            body=SAMPLE_POST_BODY,
        )

    logger.info("Install created root admin id=%s", root.id)
    return InstallReport(root_user=root, posts_created=settings.install_sample_posts)
