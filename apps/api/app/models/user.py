"""Document model for user accounts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping


@dataclass
class User:
    """A registered account, optionally holding administrator rights."""

    id: str
    name: str
    email: str
    password_hash: str
    is_admin: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> User:
        return cls(
            id=str(document["_id"]),
            name=document["name"],
            email=document["email"],
            password_hash=document["password_hash"],
            is_admin=bool(document.get("is_admin", False)),
            created_at=document["created_at"],
            updated_at=document["updated_at"],
        )

    def __repr__(self) -> str:  # pragma: no cover - debug helper only
        return f"User(id={self.id!r}, email={self.email!r}, is_admin={self.is_admin!r})"
