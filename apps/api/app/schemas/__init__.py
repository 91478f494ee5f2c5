"""Pydantic schemas used by the FastAPI application."""

from .auth import LoginRequest, TokenResponse
from .common import InstallResponse, MessageResponse
from .post import PostAuthorRead, PostCreate, PostListResponse, PostRead, PostUpdate
from .user import (
    AdminUserUpdate,
    UserCountResponse,
    UserCreate,
    UserListResponse,
    UserRead,
    UserSelfUpdate,
)

__all__ = [
    # Auth schemas
    "LoginRequest",
    "TokenResponse",
    # User schemas
    "AdminUserUpdate",
    "UserCountResponse",
    "UserCreate",
    "UserListResponse",
    "UserRead",
    "UserSelfUpdate",
    # Post schemas
    "PostAuthorRead",
    "PostCreate",
    "PostListResponse",
    "PostRead",
    "PostUpdate",
    # Shared
    "InstallResponse",
    "MessageResponse",
]
