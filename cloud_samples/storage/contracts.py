"""Storage interfaces and error types."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Protocol, runtime_checkable


class StorageError(Exception):
    """Wraps underlying storage exceptions with operation context."""

    def __init__(
        self,
        op: str,
        bucket: str | None,
        key: str | None,
        message: str,
        *,
        code: str | None = None,
    ):
        self.op = op
        self.bucket = bucket
        self.key = key
        self.message = message
        self.code = code
        super().__init__(self.__str__())

    def __str__(self) -> str:  # pragma: no cover - trivial string formatting
        bucket_repr = self.bucket or "<unknown>"
        key_repr = self.key or "<unknown>"
        return f"{self.op} failed for bucket={bucket_repr} key={key_repr}: {self.message}"


class LocalIOError(StorageError):
    """Local file missing, unreadable or unwritable."""


class RemoteServiceError(StorageError):
    """Generic failure reported by the object store or its transport."""


class InvalidArgumentError(StorageError):
    """Rejected argument, most often a wrong or missing customer encryption key."""


class NotFoundError(StorageError):
    """Referenced object, bucket or local source does not exist."""


class LocalFileNotFoundError(LocalIOError, NotFoundError):
    """Upload source path does not exist."""


@runtime_checkable
class BlobStore(Protocol):
    """Contract for the blob transfer helper.

    ``encryption_key``/``decryption_key`` are raw 32-byte AES-256 keys. An
    object written with a key must be read back with the same key.
    """

    def list_objects(self, bucket: str, *, prefix: str | None = None) -> Iterable[str]:
        ...

    def upload_file(
        self,
        bucket: str,
        local_path: str | Path,
        key: str,
        *,
        encryption_key: bytes | None = None,
        content_type: str | None = None,
    ) -> str:
        ...

    def download_file(
        self,
        bucket: str,
        key: str,
        local_path: str | Path,
        *,
        decryption_key: bytes | None = None,
    ) -> int:
        ...

    def exists(self, bucket: str, key: str, *, encryption_key: bytes | None = None) -> bool:
        ...

    def delete_if_exists(self, bucket: str, key: str) -> bool:
        ...


__all__ = [
    "StorageError",
    "LocalIOError",
    "RemoteServiceError",
    "InvalidArgumentError",
    "NotFoundError",
    "LocalFileNotFoundError",
    "BlobStore",
]
