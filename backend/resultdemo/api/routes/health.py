"""
Health check endpoints
"""
from datetime import datetime, timezone

from fastapi import APIRouter

from resultdemo.core.config import get_settings
from resultdemo.core.templates import TEMPLATES_DIR

router = APIRouter(tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
async def health_check():
    """
    Basic health check endpoint

    Returns:
        dict: Health status
    """
    settings = get_settings()
    return {
        "status": "healthy",
        "timestamp": _now(),
        "service": settings.app_name,
    }


@router.get("/health/detailed")
async def detailed_health_check():
    """
    Detailed health check with the collaborators results depend on

    Returns:
        dict: Status of the template directory and the download file
    """
    settings = get_settings()
    download_path = settings.files_path / settings.download_file
    components = {
        "templates": {
            "status": "healthy" if TEMPLATES_DIR.is_dir() else "unhealthy",
            "path": str(TEMPLATES_DIR),
        },
        "download_file": {
            "status": "healthy" if download_path.is_file() else "degraded",
            "path": str(download_path),
        },
    }

    if components["templates"]["status"] == "unhealthy":
        status = "unhealthy"
    elif any(c["status"] == "degraded" for c in components.values()):
        status = "degraded"
    else:
        status = "healthy"

    return {
        "status": status,
        "timestamp": _now(),
        "service": settings.app_name,
        "version": "0.1.0",
        "environment": settings.app_env,
        "validate_status_codes": settings.validate_status_codes,
        "components": components,
    }


@router.get("/health/liveness")
async def liveness_check():
    """
    Liveness check - is the service alive?

    Returns:
        dict: Liveness status
    """
    return {
        "status": "alive",
        "timestamp": _now()
    }
