"""MinIO-backed implementation of the blob transfer helper."""

from __future__ import annotations

import logging
import mimetypes
import os
import stat
import tempfile
from pathlib import Path
from typing import Iterator

from minio import Minio
from minio.error import S3Error
from minio.sse import SseCustomerKey

from cloud_samples.storage.contracts import (
    BlobStore,
    InvalidArgumentError,
    LocalFileNotFoundError,
    LocalIOError,
    NotFoundError,
    RemoteServiceError,
    StorageError,
)
from cloud_samples.storage.keys import KEY_SIZE_BYTES

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "NoSuchObject", "ResourceNotFound"})
_MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "NoSuchObject", "ResourceNotFound"})

# Codes the server answers with when SSE-C parameters are missing or don't match.
_KEY_REJECTED_CODES = frozenset(
    {"InvalidArgument", "InvalidRequest", "InvalidEncryptionAlgorithmError", "BadRequest"}
)


def _wrap_error(
    error_cls: type[StorageError], op: str, bucket: str | None, key: str | None, exc: Exception
) -> StorageError:
    return error_cls(op=op, bucket=bucket, key=key, message=str(exc))


def _map_s3_error(
    op: str, bucket: str | None, key: str | None, exc: S3Error, *, key_supplied: bool = False
) -> StorageError:
    code = exc.code
    if code in _NOT_FOUND_CODES:
        error_cls: type[StorageError] = NotFoundError
    elif code in _KEY_REJECTED_CODES or (key_supplied and code == "AccessDenied"):
        error_cls = InvalidArgumentError
    else:
        error_cls = RemoteServiceError
    return error_cls(op=op, bucket=bucket, key=key, message=str(exc), code=code)


def _customer_key(op: str, bucket: str, key: str, raw: bytes | None) -> SseCustomerKey | None:
    if raw is None:
        return None
    if not isinstance(raw, (bytes, bytearray)) or len(raw) != KEY_SIZE_BYTES:
        raise InvalidArgumentError(
            op=op,
            bucket=bucket,
            key=key,
            message=f"encryption key must be {KEY_SIZE_BYTES} raw bytes",
        )
    return SseCustomerKey(bytes(raw))


def _destination_mode(target: Path) -> int:
    """Mode a download should end up with: the existing file's, else umask-derived."""
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


class ObjectListing:
    """Lazy, restartable listing of object keys.

    Every iteration issues a fresh listing against the store, so the same
    instance can be walked more than once.
    """

    def __init__(self, client: Minio, bucket: str, prefix: str | None = None):
        self._client = client
        self.bucket = bucket
        self.prefix = prefix

    def __iter__(self) -> Iterator[str]:
        try:
            for obj in self._client.list_objects(
                bucket_name=self.bucket, prefix=self.prefix, recursive=True
            ):
                if obj.is_dir:
                    continue
                yield obj.object_name
        except S3Error as exc:
            raise _map_s3_error("list", self.bucket, self.prefix, exc) from exc
        except Exception as exc:
            raise _wrap_error(RemoteServiceError, "list", self.bucket, self.prefix, exc) from exc


class MinioStorage(BlobStore):
    """Blob transfer helper backed by the MinIO SDK.

    The client is constructed by the caller (see ``storage.factory``) and
    owned by whoever holds this instance.
    """

    def __init__(self, client: Minio):
        self._client = client

    # --------------
    # Listing
    # --------------
    def list_objects(self, bucket: str, *, prefix: str | None = None) -> ObjectListing:
        return ObjectListing(self._client, bucket, prefix)

    # --------------
    # Transfers
    # --------------
    def upload_file(
        self,
        bucket: str,
        local_path: str | Path,
        key: str,
        *,
        encryption_key: bytes | None = None,
        content_type: str | None = None,
    ) -> str:
        """Store the whole local file as ``key``.

        Args:
            bucket: Target bucket.
            local_path: File to read.
            key: Object key to create or overwrite.
            encryption_key: Optional 32-byte key; the object is encrypted at
                rest with it and the same key is required to read it back.
            content_type: Defaults to a guess from the file name.

        Returns:
            ``"<bucket>/<key>"``.
        """
        sse = _customer_key("upload", bucket, key, encryption_key)
        source = Path(local_path)
        try:
            fh = source.open("rb")
        except FileNotFoundError as exc:
            raise LocalFileNotFoundError(
                op="upload", bucket=bucket, key=key, message=f"local file not found: {source}"
            ) from exc
        except OSError as exc:
            raise _wrap_error(LocalIOError, "upload", bucket, key, exc) from exc

        with fh:
            length = os.fstat(fh.fileno()).st_size
            guessed, _ = mimetypes.guess_type(source.name)
            try:
                self._client.put_object(
                    bucket_name=bucket,
                    object_name=key,
                    data=fh,
                    length=length,
                    content_type=content_type or guessed or "application/octet-stream",
                    sse=sse,
                )
            except S3Error as exc:
                raise _map_s3_error("upload", bucket, key, exc, key_supplied=sse is not None) from exc
            except ValueError as exc:
                # minio validates arguments (e.g. SSE-C over plain HTTP) with ValueError
                raise _wrap_error(InvalidArgumentError, "upload", bucket, key, exc) from exc
            except Exception as exc:
                raise _wrap_error(RemoteServiceError, "upload", bucket, key, exc) from exc

        logger.info(
            "Uploaded %s to %s/%s (%d bytes%s)",
            source,
            bucket,
            key,
            length,
            ", customer key" if sse else "",
        )
        return f"{bucket}/{key}"

    def download_file(
        self,
        bucket: str,
        key: str,
        local_path: str | Path,
        *,
        decryption_key: bytes | None = None,
    ) -> int:
        """Write the object's content to ``local_path`` and return the byte count.

        The body is streamed into a temporary sibling file which replaces
        ``local_path`` only once complete; a failed fetch leaves the
        destination as it was. A wrong or missing key for an encrypted object
        is rejected by the server and surfaces as ``InvalidArgumentError``.
        """
        ssec = _customer_key("download", bucket, key, decryption_key)
        # write through symlinks to the file they point at
        target = Path(os.path.realpath(local_path))
        try:
            response = self._client.get_object(bucket_name=bucket, object_name=key, ssec=ssec)
        except S3Error as exc:
            raise _map_s3_error("download", bucket, key, exc, key_supplied=ssec is not None) from exc
        except ValueError as exc:
            raise _wrap_error(InvalidArgumentError, "download", bucket, key, exc) from exc
        except Exception as exc:
            raise _wrap_error(RemoteServiceError, "download", bucket, key, exc) from exc

        try:
            written = self._stream_to_file(response, target, bucket, key)
        finally:
            response.close()
            response.release_conn()

        logger.info("Downloaded %s/%s to %s (%d bytes)", bucket, key, target, written)
        return written

    def _stream_to_file(self, response, target: Path, bucket: str, key: str) -> int:
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".part", dir=target.parent
            )
        except OSError as exc:
            raise _wrap_error(LocalIOError, "download", bucket, key, exc) from exc

        written = 0
        try:
            with os.fdopen(fd, "wb") as fh:
                for chunk in response.stream(_CHUNK_SIZE):
                    try:
                        fh.write(chunk)
                    except OSError as exc:
                        raise _wrap_error(LocalIOError, "download", bucket, key, exc) from exc
                    written += len(chunk)
        except StorageError:
            _discard(tmp_name)
            raise
        except Exception as exc:
            # the body stopped arriving part way through
            _discard(tmp_name)
            raise _wrap_error(RemoteServiceError, "download", bucket, key, exc) from exc

        try:
            os.chmod(tmp_name, _destination_mode(target))
            os.replace(tmp_name, target)
        except OSError as exc:
            _discard(tmp_name)
            raise _wrap_error(LocalIOError, "download", bucket, key, exc) from exc
        return written

    # --------------
    # Existence and deletion
    # --------------
    def exists(self, bucket: str, key: str, *, encryption_key: bytes | None = None) -> bool:
        ssec = _customer_key("stat", bucket, key, encryption_key)
        try:
            self._client.stat_object(bucket_name=bucket, object_name=key, ssec=ssec)
        except S3Error as exc:
            if exc.code in _MISSING_OBJECT_CODES:
                return False
            error = _map_s3_error("stat", bucket, key, exc, key_supplied=ssec is not None)
            if isinstance(error, NotFoundError):
                raise error from exc
            if isinstance(error, InvalidArgumentError) and ssec is None:
                # present, but sealed with a customer key we weren't given
                return True
            raise error from exc
        except Exception as exc:
            raise _wrap_error(RemoteServiceError, "stat", bucket, key, exc) from exc
        return True

    def delete_if_exists(self, bucket: str, key: str) -> bool:
        if not self.exists(bucket, key):
            logger.debug("Nothing to delete at %s/%s", bucket, key)
            return False
        try:
            self._client.remove_object(bucket_name=bucket, object_name=key)
        except S3Error as exc:
            if exc.code in _MISSING_OBJECT_CODES:
                return False
            raise _map_s3_error("delete", bucket, key, exc) from exc
        except Exception as exc:
            raise _wrap_error(RemoteServiceError, "delete", bucket, key, exc) from exc
        logger.info("Deleted %s/%s", bucket, key)
        return True

    # --------------
    # Buckets
    # --------------
    def bucket_exists(self, name: str) -> bool:
        try:
            return self._client.bucket_exists(bucket_name=name)
        except S3Error as exc:
            raise _map_s3_error("bucket_exists", name, None, exc) from exc
        except Exception as exc:
            raise _wrap_error(RemoteServiceError, "bucket_exists", name, None, exc) from exc

    def ensure_bucket(self, name: str) -> None:
        try:
            if not self._client.bucket_exists(bucket_name=name):
                self._client.make_bucket(bucket_name=name)
                logger.info("Created bucket %s", name)
        except S3Error as exc:
            raise _map_s3_error("ensure_bucket", name, None, exc) from exc
        except Exception as exc:
            raise _wrap_error(RemoteServiceError, "ensure_bucket", name, None, exc) from exc


__all__ = ["MinioStorage", "ObjectListing"]
