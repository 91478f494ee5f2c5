"""Pydantic schemas for authentication workflows."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials payload submitted to the login endpoint."""

    email: str = Field(..., min_length=1, max_length=320)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Bearer token returned to the caller."""

    token: str
    token_type: str = "bearer"
