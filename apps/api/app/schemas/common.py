"""Schemas shared across routers."""

from __future__ import annotations

from pydantic import BaseModel

from app.schemas.user import UserRead


class MessageResponse(BaseModel):
    detail: str


class InstallResponse(BaseModel):
    detail: str
    root_user: UserRead
    posts_created: int
