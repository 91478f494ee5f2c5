from fastapi import APIRouter, Depends

from app.core.config import Settings
from app.core.deps import get_app_settings


router = APIRouter(tags=["Health"])


@router.get("/")
@router.get("/health")
def read_health(settings: Settings = Depends(get_app_settings)) -> dict[str, str]:
    """Liveness endpoint for readiness probes."""
    return {
        "status": "ok",
        "service": settings.app_name,
        "version": settings.app_version,
    }
