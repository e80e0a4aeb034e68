"""Shared dependencies for FastAPI routes."""

from __future__ import annotations

from fastapi import HTTPException, Request

from cloud_samples.storage.minio_impl import MinioStorage


def get_storage(request: Request) -> MinioStorage:
    """Return the storage helper built by the app lifespan.

    The instance lives on ``app.state`` so tests can swap it out.
    """
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise HTTPException(status_code=503, detail="Storage not configured")
    return storage


__all__ = ["get_storage"]
