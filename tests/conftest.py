"""Pytest configuration and fixtures."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from minio.error import S3Error

from cloud_samples.storage.minio_impl import MinioStorage

TEST_BUCKET = "samples"
TEST_FILE_CONTENT = b"Content of test file.txt\n"


def make_s3_error(code: str, bucket: str | None = None, key: str | None = None) -> S3Error:
    return S3Error(
        response=None,
        code=code,
        message=f"{code} raised by test",
        resource="resource",
        request_id="request",
        host_id="host",
        bucket_name=bucket,
        object_name=key,
    )


class FakeResponse:
    """Stands in for the urllib3 response returned by ``Minio.get_object``."""

    def __init__(self, data: bytes, chunk_size: int = 8):
        self._data = data
        self._chunk_size = chunk_size
        self.closed = False
        self.released = False

    def stream(self, amt: int):
        for start in range(0, len(self._data), self._chunk_size):
            yield self._data[start : start + self._chunk_size]

    def close(self):
        self.closed = True

    def release_conn(self):
        self.released = True


def _fingerprint(sse):
    return tuple(sorted(sse.headers().items())) if sse is not None else None


class FakeMinio:
    """In-memory MinIO client that checks SSE-C keys the way S3 does.

    Objects stored with a customer key can only be read with the same key;
    a mismatching key answers ``AccessDenied`` and a missing one
    ``InvalidRequest``.
    """

    def __init__(self, *buckets: str):
        self.buckets: dict[str, dict[str, tuple[bytes, tuple | None]]] = {
            name: {} for name in buckets
        }
        self.responses: list[FakeResponse] = []

    def _objects(self, bucket_name: str, object_name: str | None = None):
        if bucket_name not in self.buckets:
            raise make_s3_error("NoSuchBucket", bucket_name, object_name)
        return self.buckets[bucket_name]

    def _lookup(self, bucket_name: str, object_name: str, ssec):
        objects = self._objects(bucket_name, object_name)
        if object_name not in objects:
            raise make_s3_error("NoSuchKey", bucket_name, object_name)
        data, stored = objects[object_name]
        given = _fingerprint(ssec)
        if stored != given:
            code = "AccessDenied" if stored and given else "InvalidRequest"
            raise make_s3_error(code, bucket_name, object_name)
        return data

    def bucket_exists(self, bucket_name):
        return bucket_name in self.buckets

    def make_bucket(self, bucket_name):
        self.buckets.setdefault(bucket_name, {})

    def put_object(self, bucket_name, object_name, data, length, content_type=None, sse=None):
        objects = self._objects(bucket_name, object_name)
        objects[object_name] = (data.read(length), _fingerprint(sse))

    def get_object(self, bucket_name, object_name, ssec=None):
        response = FakeResponse(self._lookup(bucket_name, object_name, ssec))
        self.responses.append(response)
        return response

    def stat_object(self, bucket_name, object_name, ssec=None):
        data = self._lookup(bucket_name, object_name, ssec)
        return SimpleNamespace(object_name=object_name, size=len(data))

    def remove_object(self, bucket_name, object_name):
        self._objects(bucket_name, object_name).pop(object_name, None)

    def list_objects(self, bucket_name, prefix=None, recursive=False):
        for name in sorted(self._objects(bucket_name)):
            if prefix is None or name.startswith(prefix):
                yield SimpleNamespace(object_name=name, is_dir=False)


@pytest.fixture
def mock_client():
    """MagicMock standing in for ``minio.Minio``."""
    return MagicMock()


@pytest.fixture
def fake_client():
    return FakeMinio(TEST_BUCKET)


@pytest.fixture
def fake_storage(fake_client):
    """Storage helper over the in-memory client."""
    return MinioStorage(fake_client)


@pytest.fixture
def local_file(tmp_path):
    """Local copy of the sample file used by the round-trip scenarios."""
    path = tmp_path / "file.txt"
    path.write_bytes(TEST_FILE_CONTENT)
    return path


@pytest.fixture
def empty_target(tmp_path):
    """Fresh, empty download destination."""
    path = tmp_path / "downloaded.txt"
    path.write_bytes(b"")
    return path
