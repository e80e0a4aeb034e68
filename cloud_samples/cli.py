"""Command-line entry point for the storage samples.

Usage:
    cloud-samples generate-key
    cloud-samples --bucket my-bucket list --prefix foo/
    cloud-samples --bucket my-bucket upload ./file.txt file.txt
    cloud-samples --bucket my-bucket upload ./file.txt file.txt --encryption-key <base64>
    cloud-samples --bucket my-bucket download file.txt ./copy.txt
    cloud-samples --bucket my-bucket delete file.txt
    cloud-samples detect-text ./image.png
    cloud-samples detect-text gs://my-bucket/image.png

The bucket defaults to ``S3_BUCKET``; the endpoint and credentials come from
the ``S3_*`` environment variables.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from cloud_samples.core.config import Settings
from cloud_samples.core.logging import setup_logging
from cloud_samples.samples import files, vision
from cloud_samples.storage.contracts import StorageError
from cloud_samples.storage.factory import build_storage
from cloud_samples.storage.keys import decode_key

_NO_BUCKET_COMMANDS = {"generate-key", "detect-text"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cloud-samples", description="Object storage samples")
    parser.add_argument("--bucket", "-b", help="Bucket name (default: $S3_BUCKET)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("generate-key", help="Print a new base64 AES-256 encryption key")

    list_cmd = sub.add_parser("list", help="List objects in the bucket")
    list_cmd.add_argument("--prefix", help="Only list keys starting with this prefix")

    upload = sub.add_parser("upload", help="Upload a local file")
    upload.add_argument("local_path", type=Path)
    upload.add_argument("key")
    upload.add_argument("--encryption-key", help="Base64 AES-256 key to encrypt the object with")

    download = sub.add_parser("download", help="Download an object to a local file")
    download.add_argument("key")
    download.add_argument("local_path", type=Path)
    download.add_argument("--encryption-key", help="Base64 AES-256 key the object was uploaded with")

    delete = sub.add_parser("delete", help="Delete an object if it exists")
    delete.add_argument("key")

    detect = sub.add_parser("detect-text", help="Print the text found in an image")
    detect.add_argument("image", help="Local image path or gs:// URI")

    return parser


def run(args: argparse.Namespace, settings: Settings) -> None:
    if args.command == "generate-key":
        files.generate_encryption_key_base64()
        return
    if args.command == "detect-text":
        if "://" in args.image:
            vision.detect_document_text_gcs(args.image)
        else:
            vision.detect_document_text(args.image)
        return

    bucket = args.bucket or settings.S3_BUCKET
    store = build_storage(settings)

    if args.command == "list":
        if args.prefix:
            files.list_bucket_contents_with_prefix(store, bucket, args.prefix)
        else:
            files.list_bucket_contents(store, bucket)
    elif args.command == "upload":
        if args.encryption_key:
            key = decode_key(args.encryption_key)
            files.upload_encrypted_file(store, bucket, args.local_path, args.key, key)
        else:
            files.upload_file(store, bucket, args.local_path, args.key)
    elif args.command == "download":
        if args.encryption_key:
            key = decode_key(args.encryption_key)
            files.download_encrypted_file(store, bucket, args.key, args.local_path, key)
        else:
            files.download_file(store, bucket, args.key, args.local_path)
    elif args.command == "delete":
        files.delete_file(store, bucket, args.key)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings()
    setup_logging()

    if args.command not in _NO_BUCKET_COMMANDS and not (args.bucket or settings.S3_BUCKET):
        parser.error("no bucket given; pass --bucket or set S3_BUCKET")

    try:
        run(args, settings)
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except vision.VisionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
