"""Factory for building storage instances from configuration."""

from __future__ import annotations

from typing import Iterable
from urllib.parse import urlparse

from minio import Minio

from cloud_samples.core.config import Settings
from cloud_samples.storage.minio_impl import MinioStorage


def _normalize_endpoint(endpoint: str) -> tuple[str, bool]:
    """Extract host:port from endpoint URL and determine if secure (https).

    Returns:
        Tuple of (host:port, secure_flag)
    """
    parsed = urlparse(endpoint)
    secure = parsed.scheme == "https"
    host = parsed.netloc or parsed.path.rstrip("/")
    return host, secure


def build_client(settings: Settings) -> Minio:
    """Build a MinIO SDK client from settings.

    Customer-key (SSE-C) transfers are refused by the SDK unless the
    endpoint is https.
    """
    host, secure = _normalize_endpoint(settings.S3_ENDPOINT)
    return Minio(
        host,
        access_key=settings.S3_ACCESS_KEY,
        secret_key=settings.S3_SECRET_KEY,
        secure=secure,
        region=settings.S3_REGION,
    )


def build_storage(settings: Settings | None = None, *, buckets: Iterable[str] = ()) -> MinioStorage:
    """Build MinioStorage and ensure the given buckets exist.

    Each call builds a new client; callers keep the returned instance for as
    long as they need it (one per CLI run, per app lifespan or per test).

    Environment variables (via ``Settings``):
        S3_ENDPOINT: Full URL to MinIO/S3 endpoint (e.g., http://localhost:9000)
        S3_ACCESS_KEY: Access key for authentication
        S3_SECRET_KEY: Secret key for authentication
        S3_REGION: Optional region name
    """
    if settings is None:
        settings = Settings()
    storage = MinioStorage(build_client(settings))

    for bucket in buckets:
        storage.ensure_bucket(bucket)

    return storage


__all__ = ["build_client", "build_storage"]
