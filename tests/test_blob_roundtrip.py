"""Round-trip behaviour of the transfer helper over an in-memory store."""

import pytest

from cloud_samples.storage import (
    InvalidArgumentError,
    NotFoundError,
    RemoteServiceError,
    generate_encryption_key,
)
from conftest import TEST_BUCKET, TEST_FILE_CONTENT


class TestPlainRoundTrip:
    def test_download_matches_upload(self, fake_storage, local_file, empty_target):
        fake_storage.upload_file(TEST_BUCKET, local_file, "file.txt")

        written = fake_storage.download_file(TEST_BUCKET, "file.txt", empty_target)

        assert written == len(TEST_FILE_CONTENT)
        assert empty_target.stat().st_size > 0
        assert empty_target.read_bytes() == TEST_FILE_CONTENT

    def test_binary_content_is_byte_exact(self, fake_storage, tmp_path, empty_target):
        source = tmp_path / "blob.bin"
        payload = bytes(range(256)) * 300 + b"\r\n\x00"
        source.write_bytes(payload)

        fake_storage.upload_file(TEST_BUCKET, source, "blobs/blob.bin")
        fake_storage.download_file(TEST_BUCKET, "blobs/blob.bin", empty_target)

        assert empty_target.read_bytes() == payload

    def test_empty_file(self, fake_storage, tmp_path, empty_target):
        source = tmp_path / "empty.txt"
        source.write_bytes(b"")

        fake_storage.upload_file(TEST_BUCKET, source, "empty.txt")

        assert fake_storage.download_file(TEST_BUCKET, "empty.txt", empty_target) == 0
        assert empty_target.read_bytes() == b""

    def test_releases_every_response(self, fake_storage, fake_client, local_file, empty_target):
        fake_storage.upload_file(TEST_BUCKET, local_file, "file.txt")
        fake_storage.download_file(TEST_BUCKET, "file.txt", empty_target)

        assert [(r.closed, r.released) for r in fake_client.responses] == [(True, True)]

    def test_unknown_bucket(self, fake_storage, local_file):
        with pytest.raises(NotFoundError):
            fake_storage.upload_file("no-such-bucket", local_file, "file.txt")


class TestEncryptedRoundTrip:
    def test_same_key_reads_back(self, fake_storage, local_file, empty_target):
        key = generate_encryption_key()
        fake_storage.upload_file(TEST_BUCKET, local_file, "file.txt", encryption_key=key)

        fake_storage.download_file(TEST_BUCKET, "file.txt", empty_target, decryption_key=key)

        assert empty_target.read_bytes() == TEST_FILE_CONTENT

    def test_wrong_key_is_rejected(self, fake_storage, local_file, empty_target):
        fake_storage.upload_file(
            TEST_BUCKET, local_file, "file.txt", encryption_key=generate_encryption_key()
        )

        with pytest.raises(InvalidArgumentError) as excinfo:
            fake_storage.download_file(
                TEST_BUCKET, "file.txt", empty_target, decryption_key=generate_encryption_key()
            )

        assert not isinstance(excinfo.value, RemoteServiceError)
        assert empty_target.stat().st_size == 0

    def test_missing_key_is_rejected(self, fake_storage, local_file, empty_target):
        fake_storage.upload_file(
            TEST_BUCKET, local_file, "file.txt", encryption_key=generate_encryption_key()
        )

        with pytest.raises(InvalidArgumentError):
            fake_storage.download_file(TEST_BUCKET, "file.txt", empty_target)

        assert empty_target.stat().st_size == 0

    def test_sealed_object_still_exists(self, fake_storage, local_file):
        key = generate_encryption_key()
        fake_storage.upload_file(TEST_BUCKET, local_file, "file.txt", encryption_key=key)

        assert fake_storage.exists(TEST_BUCKET, "file.txt") is True
        assert fake_storage.exists(TEST_BUCKET, "file.txt", encryption_key=key) is True

    def test_sealed_object_can_be_deleted(self, fake_storage, local_file):
        fake_storage.upload_file(
            TEST_BUCKET, local_file, "file.txt", encryption_key=generate_encryption_key()
        )

        assert fake_storage.delete_if_exists(TEST_BUCKET, "file.txt") is True
        assert fake_storage.exists(TEST_BUCKET, "file.txt") is False


class TestListingAndDeletion:
    @pytest.fixture
    def populated(self, fake_storage, local_file):
        for key in ("foo/hello", "foo/hi/there", "bar/hello", "bar/hi/there", "file.txt"):
            fake_storage.upload_file(TEST_BUCKET, local_file, key)
        return fake_storage

    def test_lists_everything_without_prefix(self, populated):
        assert set(populated.list_objects(TEST_BUCKET)) == {
            "foo/hello",
            "foo/hi/there",
            "bar/hello",
            "bar/hi/there",
            "file.txt",
        }

    def test_prefix_filter(self, populated):
        names = list(populated.list_objects(TEST_BUCKET, prefix="foo/"))

        assert set(names) == {"foo/hello", "foo/hi/there"}
        assert all(name.startswith("foo/") for name in names)

    def test_listing_reflects_later_uploads(self, populated, local_file):
        listing = populated.list_objects(TEST_BUCKET, prefix="foo/")
        assert len(list(listing)) == 2

        populated.upload_file(TEST_BUCKET, local_file, "foo/new")

        assert "foo/new" in list(listing)

    def test_delete_if_exists_is_idempotent(self, populated):
        assert populated.delete_if_exists(TEST_BUCKET, "file.txt") is True
        assert populated.delete_if_exists(TEST_BUCKET, "file.txt") is False
        assert populated.delete_if_exists(TEST_BUCKET, "never/was/here") is False
        assert "file.txt" not in set(populated.list_objects(TEST_BUCKET))
