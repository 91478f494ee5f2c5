"""Database access helpers for blog posts."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database

from app.db import POSTS_COLLECTION
from app.models.post import Post
from app.repositories.base import BaseRepository, parse_object_id


class PostRepository(BaseRepository[Post]):
    """Repository for interacting with post documents."""

    def __init__(self) -> None:
        super().__init__(POSTS_COLLECTION)

    def to_model(self, document: dict[str, Any]) -> Post:
        return Post.from_document(document)

    def create(self, db: Database, *, author_id: ObjectId, title: str, body: str) -> Post:
        now = datetime.now(timezone.utc)
        document = {
            "title": title.strip(),
            "body": body,
            "author_id": author_id,
            "created_at": now,
            "updated_at": now,
        }
        result = self.collection(db).insert_one(document)
        document["_id"] = result.inserted_id
        return Post.from_document(document)

    def list_page_documents(self, db: Database, *, skip: int, limit: int) -> list[dict[str, Any]]:
        """Return raw documents for one page, newest first."""
        cursor = (
            self.collection(db)
            .find({})
            .sort([("created_at", DESCENDING), ("_id", DESCENDING)])
            .skip(skip)
            .limit(limit)
        )
        return list(cursor)

    def update(
        self, db: Database, identifier: str | ObjectId, *, data: dict[str, Any]
    ) -> Post | None:
        object_id = parse_object_id(identifier)
        if object_id is None:
            return None
        changes = dict(data)
        if "title" in changes:
            changes["title"] = changes["title"].strip()
        changes["updated_at"] = datetime.now(timezone.utc)
        document = self.collection(db).find_one_and_update(
            {"_id": object_id}, {"$set": changes}, return_document=ReturnDocument.AFTER
        )
        return Post.from_document(document) if document is not None else None
