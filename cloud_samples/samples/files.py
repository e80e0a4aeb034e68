"""Storage samples: one call into the blob store each, printing the outcome.

Every function takes the store explicitly; build one with
``cloud_samples.storage.factory.build_storage``. Errors propagate unchanged.
"""

from __future__ import annotations

from pathlib import Path

from cloud_samples.storage.contracts import BlobStore
from cloud_samples.storage.keys import encode_key, generate_encryption_key


def generate_encryption_key_base64() -> str:
    """Generate an AES-256 key and print it base64-encoded."""
    encoded = encode_key(generate_encryption_key())
    print(f"Sample encryption key: {encoded}")
    return encoded


def list_bucket_contents(store: BlobStore, bucket: str) -> list[str]:
    names = []
    for name in store.list_objects(bucket):
        print(name)
        names.append(name)
    return names


def list_bucket_contents_with_prefix(store: BlobStore, bucket: str, prefix: str) -> list[str]:
    names = []
    for name in store.list_objects(bucket, prefix=prefix):
        print(name)
        names.append(name)
    return names


def upload_file(
    store: BlobStore, bucket: str, local_file_path: str | Path, storage_file_path: str
) -> None:
    store.upload_file(bucket, local_file_path, storage_file_path)
    print(f"Uploaded {local_file_path} as {storage_file_path}")


def upload_encrypted_file(
    store: BlobStore,
    bucket: str,
    local_file_path: str | Path,
    storage_file_path: str,
    encryption_key: bytes,
) -> None:
    store.upload_file(bucket, local_file_path, storage_file_path, encryption_key=encryption_key)
    print(f"Uploaded {storage_file_path} with encryption key")


def download_file(store: BlobStore, bucket: str, file_name: str, local_path: str | Path) -> None:
    store.download_file(bucket, file_name, local_path)
    print(f"Downloaded {file_name}")


def download_encrypted_file(
    store: BlobStore,
    bucket: str,
    storage_file_path: str,
    local_file_path: str | Path,
    encryption_key: bytes,
) -> None:
    store.download_file(bucket, storage_file_path, local_file_path, decryption_key=encryption_key)
    print(f"Downloaded encrypted {storage_file_path}")


def delete_file(store: BlobStore, bucket: str, storage_file_path: str) -> bool:
    if store.delete_if_exists(bucket, storage_file_path):
        print(f"Deleted {storage_file_path}")
        return True
    print(f"{storage_file_path} does not exist")
    return False
