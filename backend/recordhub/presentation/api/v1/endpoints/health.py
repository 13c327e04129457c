"""Health check endpoint, always available."""

from fastapi import APIRouter, Depends

from recordhub.config import Settings
from recordhub.infrastructure.dependencies import get_settings_from_app

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings_from_app)) -> dict:
    """Report status, version, environment and where registered users are kept."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "userStorage": "file" if settings.user_storage_path.strip() else "memory",
    }
