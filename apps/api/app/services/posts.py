"""Post workflows with author ownership checks."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends
from pymongo.database import Database

from app.core.deps import Identity
from app.core.errors import Forbidden, NotFound, ValidationError
from app.core.pagination import PageWindow
from app.db import get_db
from app.models.post import Post, PostAuthor
from app.repositories.base import parse_object_id
from app.repositories.post import PostRepository
from app.repositories.user import UserRepository

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, db: Database) -> None:
        self._db = db
        self._posts = PostRepository()
        self._users = UserRepository()

    def create_post(self, author_id: str, *, title: str, body: str) -> Post:
        object_id = parse_object_id(author_id)
        if object_id is None:
            raise ValidationError("Invalid author id")
        post = self._posts.create(self._db, author_id=object_id, title=title, body=body)
        logger.info("Created post id=%s author=%s", post.id, author_id)
        return post

    def list_posts(self, window: PageWindow) -> list[Post]:
        """Return one page of posts, newest first, with their authors joined."""

        documents = self._posts.list_page_documents(
            self._db, skip=window.skip, limit=window.limit
        )
        author_ids = list({document["author_id"] for document in documents})
        authors = self._users.list_by_ids(self._db, author_ids)

        posts = []
        for document in documents:
            user = authors.get(str(document["author_id"]))
            author = PostAuthor(id=user.id, name=user.name, email=user.email) if user else None
            posts.append(Post.from_document(document, author=author))
        return posts

    def _owned_post(self, post_id: str, identity: Identity) -> Post:
        post = self._posts.get(self._db, post_id)
        if post is None:
            raise NotFound("Post not found")
        if post.author_id != identity.user_id and not identity.is_admin:
            raise Forbidden()
        return post

    def update_post(self, post_id: str, identity: Identity, fields: dict[str, Any]) -> Post:
        post = self._owned_post(post_id, identity)
        if not fields:
            return post
        updated = self._posts.update(self._db, post_id, data=fields)
        if updated is None:
            raise NotFound("Post not found")
        return updated

    def delete_post(self, post_id: str, identity: Identity) -> None:
        self._owned_post(post_id, identity)
        if not self._posts.delete(self._db, post_id):
            raise NotFound("Post not found")
        logger.info("Deleted post id=%s by user=%s", post_id, identity.user_id)


def get_post_service(db: Database = Depends(get_db)) -> PostService:
    return PostService(db)
