"""Health check and configuration diagnostics."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_settings, get_storage
from port.storage import KeyValueStorage
from utils.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(
    settings: Settings = Depends(get_settings),
    storage: KeyValueStorage = Depends(get_storage),
):
    """Health check endpoint with dependency status.

    A missing provider key is reported but is not unhealthy: every
    provider-backed route has a no-key behavior.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {
            "provider": {
                "status": "configured" if settings.has_provider_key else "not_configured",
                "model": settings.model,
            },
        },
    }

    overall_healthy = True

    ping = getattr(storage, "ping", None)
    if ping is None:
        health_status["services"]["storage"] = {
            "status": "healthy",
            "backend": settings.storage_backend,
        }
    else:
        try:
            ok = ping()
        except Exception as e:
            logger.warning("Storage ping failed", extra={"error": str(e)})
            ok = False
        health_status["services"]["storage"] = {
            "status": "healthy" if ok else "unhealthy",
            "backend": settings.storage_backend,
        }
        overall_healthy = ok

    if not overall_healthy:
        health_status["status"] = "degraded"

    status_code = status.HTTP_200_OK if overall_healthy else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        content=health_status,
        status_code=status_code
    )


@router.get("/env-check")
async def env_check(settings: Settings = Depends(get_settings)):
    """Report where the provider key was looked for and whether one was found."""
    return settings.env_check()
