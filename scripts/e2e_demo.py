#!/usr/bin/env python3
"""
End-to-end demo of the blob transfer helper against a live bucket.

Prerequisites:
    1. A MinIO/S3 endpoint reachable at S3_ENDPOINT (https for the
       encrypted steps)
    2. S3_ACCESS_KEY / S3_SECRET_KEY set in the environment or .env
    3. S3_BUCKET naming a bucket the credentials can write to

Usage:
    python scripts/e2e_demo.py

    # Skip the customer-key steps (plain http endpoints):
    python scripts/e2e_demo.py --no-encryption

    # Use another bucket:
    python scripts/e2e_demo.py --bucket scratch
"""

import argparse
import sys
import tempfile
from pathlib import Path

from cloud_samples.core.config import Settings
from cloud_samples.storage import (
    InvalidArgumentError,
    MinioStorage,
    StorageError,
    generate_encryption_key,
)
from cloud_samples.storage.factory import build_storage

CONTENT = b"Content of test file.txt\n"
OBJECT_KEY = "file.txt"


def step(index: int, total: int, title: str) -> None:
    print(f"\n[{index}/{total}] {title}")


def round_trip(storage: MinioStorage, bucket: str, workdir: Path, key: bytes | None = None) -> bytes:
    """Upload the sample file and read it back into a fresh path."""
    source = workdir / "source.txt"
    source.write_bytes(CONTENT)
    storage.delete_if_exists(bucket, OBJECT_KEY)
    storage.upload_file(bucket, source, OBJECT_KEY, encryption_key=key)

    target = workdir / "downloaded.txt"
    target.write_bytes(b"")
    storage.download_file(bucket, OBJECT_KEY, target, decryption_key=key)
    return target.read_bytes()


def main():
    parser = argparse.ArgumentParser(description="E2E demo for the blob transfer helper")
    parser.add_argument("--bucket", "-b", help="Bucket to use (default: $S3_BUCKET)")
    parser.add_argument("--no-encryption", action="store_true", help="Skip customer-key steps")
    args = parser.parse_args()

    settings = Settings()
    bucket = args.bucket or settings.S3_BUCKET
    if not bucket:
        print("Error: no bucket given; pass --bucket or set S3_BUCKET")
        sys.exit(1)

    total = 3 if args.no_encryption else 5

    print("=" * 60)
    print("BLOB TRANSFER HELPER - E2E DEMO")
    print("=" * 60)

    storage = build_storage(settings)

    # Step 1: Bucket check
    step(1, total, f"Checking bucket {bucket}...")
    try:
        if not storage.bucket_exists(bucket):
            print(f"  Error: bucket {bucket} does not exist")
            sys.exit(1)
    except StorageError as e:
        print(f"  Error: {e}")
        sys.exit(1)
    print("  Bucket is reachable")

    with tempfile.TemporaryDirectory(prefix="cloud-samples-") as tmp:
        workdir = Path(tmp)

        # Step 2: Plain round trip
        step(2, total, f"Uploading and downloading {OBJECT_KEY}...")
        try:
            data = round_trip(storage, bucket, workdir)
        except StorageError as e:
            print(f"  Error: {e}")
            sys.exit(1)
        if data != CONTENT:
            print(f"  Content mismatch: {data!r}")
            sys.exit(1)
        print(f"  Round trip OK ({len(data)} bytes)")

        # Step 3: Prefix listing
        step(3, total, "Listing objects...")
        names = list(storage.list_objects(bucket, prefix=OBJECT_KEY))
        if OBJECT_KEY not in names:
            print(f"  Error: {OBJECT_KEY} missing from listing")
            sys.exit(1)
        print(f"  Found {OBJECT_KEY}")

        if not args.no_encryption:
            key = generate_encryption_key()

            # Step 4: Encrypted round trip
            step(4, total, "Round trip with a customer encryption key...")
            try:
                data = round_trip(storage, bucket, workdir, key)
            except StorageError as e:
                print(f"  Error: {e}")
                sys.exit(1)
            if data != CONTENT:
                print(f"  Content mismatch: {data!r}")
                sys.exit(1)
            print("  Encrypted round trip OK")

            # Step 5: Wrong key must be rejected
            step(5, total, "Downloading with the wrong key...")
            target = workdir / "wrong-key.txt"
            target.write_bytes(b"")
            try:
                storage.download_file(
                    bucket, OBJECT_KEY, target, decryption_key=generate_encryption_key()
                )
                print("  Error: download with the wrong key succeeded")
                sys.exit(1)
            except InvalidArgumentError as e:
                print(f"  Rejected as expected ({e.code})")
            if target.stat().st_size != 0:
                print("  Error: destination was written")
                sys.exit(1)

        storage.delete_if_exists(bucket, OBJECT_KEY)

    print("\n" + "=" * 60)
    print("ALL STEPS PASSED")
    print("=" * 60)
    sys.exit(0)


if __name__ == "__main__":
    main()
