"""Request guards and shared FastAPI dependencies.

``get_current_identity`` proves who the caller is from the bearer token;
``require_admin`` builds on it and checks the stored admin flag.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.database import Database

from app.core.config import Settings
from app.core.errors import Forbidden, InvalidToken, NotFound, Unauthenticated
from app.core.security import TokenError, decode_access_token
from app.db import get_db
from app.models.user import User
from app.repositories.user import UserRepository

_bearer_scheme = HTTPBearer(auto_error=False)
_user_repository = UserRepository()


@dataclass(frozen=True)
class Identity:
    """Authenticated caller as asserted by a verified token."""

    user_id: str
    is_admin: bool


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was built with."""
    return request.app.state.settings


def get_current_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> Identity:
    """Resolve the caller from a bearer token, rejecting missing or invalid ones."""

    if credentials is None:
        # HTTPBearer yields None for both an absent header and a non-bearer one.
        if request.headers.get("Authorization"):
            raise InvalidToken("Authorization header must use the Bearer scheme")
        raise Unauthenticated()

    try:
        payload = decode_access_token(credentials.credentials, settings=settings)
    except TokenError as exc:
        raise InvalidToken(f"Invalid token: {exc}") from exc

    return Identity(user_id=str(payload["sub"]), is_admin=bool(payload.get("is_admin", False)))


def require_admin(
    identity: Identity = Depends(get_current_identity),
    db: Database = Depends(get_db),
) -> User:
    """Allow the request only when the caller's stored account is an admin."""

    user = _user_repository.get(db, identity.user_id)
    if user is None:
        raise NotFound("User not found")
    if not user.is_admin:
        raise Forbidden("Administrator permission required")
    return user
