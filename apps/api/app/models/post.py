"""Document model for blog posts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping


@dataclass
class PostAuthor:
    """Public subset of the author joined onto listed posts."""

    id: str
    name: str
    email: str


@dataclass
class Post:
    """A blog post written by a single user."""

    id: str
    title: str
    body: str
    author_id: str
    created_at: datetime
    updated_at: datetime
    author: PostAuthor | None = None

    @classmethod
    def from_document(
        cls, document: Mapping[str, Any], author: PostAuthor | None = None
    ) -> Post:
        return cls(
            id=str(document["_id"]),
            title=document["title"],
            body=document["body"],
            author_id=str(document["author_id"]),
            created_at=document["created_at"],
            updated_at=document["updated_at"],
            author=author,
        )
