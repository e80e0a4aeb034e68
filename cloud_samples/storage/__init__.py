"""Storage package: blob transfer helper over S3-compatible object storage."""

from cloud_samples.storage.contracts import (
    BlobStore,
    InvalidArgumentError,
    LocalFileNotFoundError,
    LocalIOError,
    NotFoundError,
    RemoteServiceError,
    StorageError,
)
from cloud_samples.storage.keys import decode_key, encode_key, generate_encryption_key
from cloud_samples.storage.minio_impl import MinioStorage, ObjectListing

__all__ = [
    "BlobStore",
    "StorageError",
    "LocalIOError",
    "RemoteServiceError",
    "InvalidArgumentError",
    "NotFoundError",
    "LocalFileNotFoundError",
    "MinioStorage",
    "ObjectListing",
    "generate_encryption_key",
    "encode_key",
    "decode_key",
]
