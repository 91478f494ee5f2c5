"""Pagination window shared by the list endpoints."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Query

from app.core.config import Settings
from app.core.deps import get_app_settings
from app.core.errors import ValidationError


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def build_page_window(page: int, limit: int, allowed_sizes: tuple[int, ...]) -> PageWindow:
    """Validate a (page, page size) pair against the allowed sizes."""

    if limit not in allowed_sizes:
        allowed = ", ".join(str(size) for size in allowed_sizes)
        raise ValidationError(f"limite must be one of: {allowed}")
    if page < 1:
        raise ValidationError("pagina must be greater than or equal to 1")
    return PageWindow(page=page, limit=limit)


def get_page_window(
    limit: int = Query(5, alias="limite", description="Page size (5, 10 or 30)"),
    page: int = Query(1, alias="pagina", description="1-based page number"),
    settings: Settings = Depends(get_app_settings),
) -> PageWindow:
    return build_page_window(page, limit, settings.allowed_page_sizes)
