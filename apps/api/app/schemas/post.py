"""Pydantic schemas for blog post payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PostCreate(BaseModel):
    """Payload for creating a post."""

    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)

    @field_validator("title", "body")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class PostUpdate(BaseModel):
    """Partial update of a post's content."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    body: str | None = Field(default=None, min_length=1)

    @field_validator("title", "body")
    @classmethod
    def _not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value


class PostAuthorRead(BaseModel):
    id: str
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class PostRead(BaseModel):
    """Representation returned by the API for persisted posts."""

    id: str
    title: str
    body: str
    author_id: str
    author: PostAuthorRead | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostListResponse(BaseModel):
    posts: list[PostRead]
    page: int
    limit: int
