"""One-shot store bootstrap endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pymongo.database import Database

from app.core.config import Settings
from app.core.deps import get_app_settings
from app.core.errors import Forbidden
from app.db import get_db
from app.schemas.common import InstallResponse
from app.schemas.user import UserRead
from app.services.install import install

router = APIRouter(prefix="/install", tags=["Install"])


@router.get("/install", response_model=InstallResponse)
def run_install(
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> InstallResponse:
    """Reset users and posts, then create the root admin and sample posts."""

    if not settings.install_enabled:
        raise Forbidden("Install is disabled")

    report = install(db, settings)
    return InstallResponse(
        detail="Database installed",
        root_user=UserRead.model_validate(report.root_user),
        posts_created=report.posts_created,
    )
