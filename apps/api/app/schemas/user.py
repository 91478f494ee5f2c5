"""Pydantic schemas for user account payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.security import MAX_PASSWORD_BYTES


def _check_password_length(value: str | None) -> str | None:
    if value is not None and len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class UserCreate(BaseModel):
    """Payload for registering an account (regular or administrator)."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1)

    @field_validator("name", "email")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("password")
    @classmethod
    def _password_fits(cls, value: str) -> str:
        return _check_password_length(value)


class UserSelfUpdate(BaseModel):
    """Fields a user may change on their own account."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, min_length=1, max_length=320)
    password: str | None = Field(default=None, min_length=1)

    @field_validator("name", "email")
    @classmethod
    def _not_blank(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("password")
    @classmethod
    def _password_fits(cls, value: str | None) -> str | None:
        return _check_password_length(value)


class AdminUserUpdate(UserSelfUpdate):
    """Fields an administrator may change on any account."""

    is_admin: bool | None = None


class UserRead(BaseModel):
    """Public representation of an account; never carries the password hash."""

    id: str
    name: str
    email: str
    is_admin: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    users: list[UserRead]
    page: int
    limit: int


class UserCountResponse(BaseModel):
    name: str
    is_admin: bool
    total_users: int
