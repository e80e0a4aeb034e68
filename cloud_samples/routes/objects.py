"""Read-only listing of the configured bucket."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from cloud_samples.core.config import settings
from cloud_samples.deps import get_storage
from cloud_samples.storage import MinioStorage, NotFoundError, StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/objects", tags=["objects"])


@router.get("")
def list_objects(prefix: str | None = None, storage: MinioStorage = Depends(get_storage)):
    """List object keys in ``S3_BUCKET``, optionally restricted to a prefix."""
    if not settings.S3_BUCKET:
        raise HTTPException(status_code=503, detail="No bucket configured")

    try:
        names = list(storage.list_objects(settings.S3_BUCKET, prefix=prefix))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.message) from exc
    except StorageError as exc:
        logger.error("Listing %s failed: %s", settings.S3_BUCKET, exc)
        raise HTTPException(status_code=502, detail="Object storage unavailable") from exc

    return {"bucket": settings.S3_BUCKET, "prefix": prefix, "objects": names}
