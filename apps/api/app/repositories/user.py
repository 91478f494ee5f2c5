"""Repository utilities for user persistence."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pymongo import ASCENDING, ReturnDocument
from pymongo.database import Database

from app.db import COUNTERS_COLLECTION, USERS_COLLECTION
from app.models.user import User
from app.repositories.base import BaseRepository, parse_object_id

ADMIN_COUNTER_ID = "admins"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserRepository(BaseRepository[User]):
    """Data-access helper for user accounts and the admin quota counter.

    Inserts and email changes raise ``pymongo.errors.DuplicateKeyError`` when
    the unique email index rejects them.
    """

    def __init__(self) -> None:
        super().__init__(USERS_COLLECTION)

    def to_model(self, document: dict[str, Any]) -> User:
        return User.from_document(document)

    def get_by_email(self, db: Database, email: str) -> User | None:
        """Return a user matching the supplied email if it exists."""

        document = self.collection(db).find_one({"email": normalize_email(email)})
        return User.from_document(document) if document is not None else None

    def create(
        self,
        db: Database,
        *,
        name: str,
        email: str,
        password_hash: str,
        is_admin: bool = False,
    ) -> User:
        now = datetime.now(timezone.utc)
        document = {
            "name": name.strip(),
            "email": normalize_email(email),
            "password_hash": password_hash,
            "is_admin": is_admin,
            "created_at": now,
            "updated_at": now,
        }
        result = self.collection(db).insert_one(document)
        document["_id"] = result.inserted_id
        return User.from_document(document)

    def update(
        self,
        db: Database,
        identifier: str | ObjectId,
        *,
        data: dict[str, Any],
        require_admin_flag: bool | None = None,
    ) -> User | None:
        """Apply ``data`` and return the updated user.

        With ``require_admin_flag`` set, the write only lands while the stored
        flag still equals it; None is returned when nothing matched.
        """

        object_id = parse_object_id(identifier)
        if object_id is None:
            return None
        changes = dict(data)
        if "email" in changes:
            changes["email"] = normalize_email(changes["email"])
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        changes["updated_at"] = datetime.now(timezone.utc)

        query: dict[str, Any] = {"_id": object_id}
        if require_admin_flag is not None:
            query["is_admin"] = require_admin_flag
        document = self.collection(db).find_one_and_update(
            query, {"$set": changes}, return_document=ReturnDocument.AFTER
        )
        return User.from_document(document) if document is not None else None

    def list_paginated(self, db: Database, *, skip: int, limit: int) -> list[User]:
        cursor = (
            self.collection(db)
            .find({})
            .sort([("created_at", ASCENDING), ("_id", ASCENDING)])
            .skip(skip)
            .limit(limit)
        )
        return [User.from_document(document) for document in cursor]

    def list_by_ids(self, db: Database, identifiers: list[ObjectId]) -> dict[str, User]:
        if not identifiers:
            return {}
        cursor = self.collection(db).find({"_id": {"$in": identifiers}})
        return {str(document["_id"]): User.from_document(document) for document in cursor}

    def count_admins(self, db: Database) -> int:
        return self.count(db, {"is_admin": True})

    # Admin quota counter

    def ensure_admin_counter(self, db: Database) -> None:
        """Seed the admin counter from the users collection when it is missing."""

        db[COUNTERS_COLLECTION].update_one(
            {"_id": ADMIN_COUNTER_ID},
            {"$setOnInsert": {"count": self.count_admins(db)}},
            upsert=True,
        )

    def reset_admin_counter(self, db: Database, count: int) -> None:
        db[COUNTERS_COLLECTION].update_one(
            {"_id": ADMIN_COUNTER_ID}, {"$set": {"count": count}}, upsert=True
        )

    def reserve_admin_slot(self, db: Database, limit: int) -> bool:
        """Atomically take one admin slot if fewer than ``limit`` are used."""

        self.ensure_admin_counter(db)
        document = db[COUNTERS_COLLECTION].find_one_and_update(
            {"_id": ADMIN_COUNTER_ID, "count": {"$lt": limit}},
            {"$inc": {"count": 1}},
            return_document=ReturnDocument.AFTER,
        )
        return document is not None

    def release_admin_slot(self, db: Database) -> None:
        db[COUNTERS_COLLECTION].update_one(
            {"_id": ADMIN_COUNTER_ID, "count": {"$gt": 0}},
            {"$inc": {"count": -1}},
        )
