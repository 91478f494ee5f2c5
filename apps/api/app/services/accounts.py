"""Account workflows: registration, login and user administration."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from app.core.config import Settings
from app.core.deps import get_app_settings
from app.core.errors import (
    AdminLimitExceeded,
    Conflict,
    Forbidden,
    InvalidCredentials,
    NotFound,
    ValidationError,
)
from app.core.pagination import PageWindow
from app.core.security import create_access_token, hash_password, verify_password
from app.db import get_db
from app.models.user import User
from app.repositories.user import UserRepository, normalize_email

logger = logging.getLogger(__name__)


class AccountService:
    """Business rules for user accounts, bound to one database and settings."""

    def __init__(self, db: Database, settings: Settings) -> None:
        self._db = db
        self._settings = settings
        self._users = UserRepository()

    def _hash(self, password: str) -> str:
        try:
            return hash_password(password, rounds=self._settings.bcrypt_rounds)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

    def _insert(self, *, name: str, email: str, password: str, is_admin: bool) -> User:
        try:
            return self._users.create(
                self._db,
                name=name,
                email=email,
                password_hash=self._hash(password),
                is_admin=is_admin,
            )
        except DuplicateKeyError as exc:
            raise Conflict() from exc

    def register(self, *, name: str, email: str, password: str) -> User:
        if self._users.get_by_email(self._db, email) is not None:
            raise Conflict()
        user = self._insert(name=name, email=email, password=password, is_admin=False)
        logger.info("Registered user id=%s", user.id)
        return user

    def create_admin(self, *, name: str, email: str, password: str) -> User:
        """Create an administrator while honouring the admin cap."""

        if self._users.get_by_email(self._db, email) is not None:
            raise Conflict()
        if not self._users.reserve_admin_slot(self._db, self._settings.admin_limit):
            raise AdminLimitExceeded(
                f"The limit of {self._settings.admin_limit} administrators has been reached"
            )
        try:
            user = self._insert(name=name, email=email, password=password, is_admin=True)
        except Exception:
            self._users.release_admin_slot(self._db)
            raise
        logger.info("Created administrator id=%s", user.id)
        return user

    def login(self, *, email: str, password: str) -> str:
        user = self._users.get_by_email(self._db, email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected login for %s", normalize_email(email))
            raise InvalidCredentials()
        return create_access_token(
            user_id=user.id, is_admin=user.is_admin, settings=self._settings
        )

    def _prepare_changes(self, fields: dict[str, Any]) -> dict[str, Any]:
        changes = dict(fields)
        password = changes.pop("password", None)
        if password:
            changes["password_hash"] = self._hash(password)
        return changes

    def _apply(self, user_id: str, changes: dict[str, Any], **kwargs: Any) -> User | None:
        try:
            return self._users.update(self._db, user_id, data=changes, **kwargs)
        except DuplicateKeyError as exc:
            raise Conflict() from exc

    def update_self(self, user_id: str, fields: dict[str, Any]) -> User:
        """Update the caller's own name, email or password."""

        changes = self._prepare_changes(fields)
        changes.pop("is_admin", None)
        user = self._apply(user_id, changes)
        if user is None:
            raise NotFound("User not found")
        return user

    def admin_update_user(self, user_id: str, fields: dict[str, Any]) -> User:
        """Update any account; promotions take an admin slot first."""

        target = self._users.get(self._db, user_id)
        if target is None:
            raise NotFound("User not found")

        changes = self._prepare_changes(fields)
        wants_admin = changes.pop("is_admin", None)

        if wants_admin is True and not target.is_admin:
            if not self._users.reserve_admin_slot(self._db, self._settings.admin_limit):
                raise AdminLimitExceeded(
                    f"The limit of {self._settings.admin_limit} administrators has been reached"
                )
            try:
                promoted = self._apply(
                    user_id, {**changes, "is_admin": True}, require_admin_flag=False
                )
            except Exception:
                self._users.release_admin_slot(self._db)
                raise
            if promoted is None:
                # Promoted concurrently; the slot we took is not needed.
                self._users.release_admin_slot(self._db)
            else:
                logger.info("Promoted user id=%s to administrator", user_id)
                return promoted
        elif wants_admin is False and target.is_admin:
            demoted = self._apply(
                user_id, {**changes, "is_admin": False}, require_admin_flag=True
            )
            if demoted is not None:
                self._users.release_admin_slot(self._db)
                logger.info("Demoted administrator id=%s", user_id)
                return demoted

        user = self._apply(user_id, changes)
        if user is None:
            raise NotFound("User not found")
        return user

    def admin_delete_user(self, user_id: str) -> None:
        target = self._users.get(self._db, user_id)
        if target is None:
            raise NotFound("User not found")
        if target.is_admin:
            raise Forbidden("Administrators cannot delete other administrators")
        self._users.delete(self._db, user_id)
        logger.info("Deleted user id=%s", user_id)

    def list_users(self, window: PageWindow) -> list[User]:
        return self._users.list_paginated(self._db, skip=window.skip, limit=window.limit)

    def get_user(self, user_id: str) -> User:
        user = self._users.get(self._db, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def count_users(self) -> int:
        return self._users.count(self._db)


def get_account_service(
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AccountService:
    return AccountService(db, settings)
