"""Shared repository helpers used by concrete persistence classes."""

from __future__ import annotations

from typing import Any, Generic, Mapping, TypeVar

from bson import ObjectId
from pymongo.collection import Collection
from pymongo.database import Database

T = TypeVar("T")


def parse_object_id(identifier: str | ObjectId) -> ObjectId | None:
    """Return ``identifier`` as an ObjectId, or None when it is malformed."""

    if isinstance(identifier, ObjectId):
        return identifier
    if isinstance(identifier, str) and ObjectId.is_valid(identifier):
        return ObjectId(identifier)
    return None


class BaseRepository(Generic[T]):
    """Small abstraction around a single MongoDB collection."""

    def __init__(self, collection_name: str):
        self._collection_name = collection_name

    def collection(self, db: Database) -> Collection:
        """Return the collection handled by the repository."""

        return db[self._collection_name]

    def to_model(self, document: Mapping[str, Any]) -> T:  # pragma: no cover - abstract
        raise NotImplementedError

    def get(self, db: Database, identifier: str | ObjectId) -> T | None:
        """Fetch a single document by id; malformed ids simply miss."""

        object_id = parse_object_id(identifier)
        if object_id is None:
            return None
        document = self.collection(db).find_one({"_id": object_id})
        return self.to_model(document) if document is not None else None

    def count(self, db: Database, query: Mapping[str, Any] | None = None) -> int:
        return self.collection(db).count_documents(dict(query or {}))

    def delete(self, db: Database, identifier: str | ObjectId) -> bool:
        """Remove a document, reporting whether anything was deleted."""

        object_id = parse_object_id(identifier)
        if object_id is None:
            return False
        return self.collection(db).delete_one({"_id": object_id}).deleted_count == 1

    def delete_all(self, db: Database) -> int:
        return self.collection(db).delete_many({}).deleted_count
