"""Health check endpoints."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from cloud_samples.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    """Liveness probe."""
    return {"status": "ok"}


@router.get("/health/ready")
def readiness_check(request: Request):
    """Readiness probe - checks the configured bucket is reachable."""
    checks = {}
    all_ok = True

    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        checks["storage"] = "not configured"
        all_ok = False
    elif not settings.S3_BUCKET:
        checks["storage"] = "no bucket configured"
        all_ok = False
    else:
        try:
            if storage.bucket_exists(settings.S3_BUCKET):
                checks["storage"] = "ok"
            else:
                checks["storage"] = f"bucket {settings.S3_BUCKET} not found"
                all_ok = False
        except Exception as e:
            logger.warning("Storage readiness check failed: %s", e)
            checks["storage"] = f"error: {e}"
            all_ok = False

    return JSONResponse(
        status_code=200 if all_ok else 503,
        content={"status": "ok" if all_ok else "degraded", "checks": checks},
    )
