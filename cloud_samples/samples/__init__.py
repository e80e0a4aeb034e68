"""Printable storage and text detection samples."""

from cloud_samples.samples.files import (
    delete_file,
    download_encrypted_file,
    download_file,
    generate_encryption_key_base64,
    list_bucket_contents,
    list_bucket_contents_with_prefix,
    upload_encrypted_file,
    upload_file,
)
from cloud_samples.samples.vision import (
    VisionError,
    detect_document_text,
    detect_document_text_gcs,
)

__all__ = [
    "VisionError",
    "delete_file",
    "detect_document_text",
    "detect_document_text_gcs",
    "download_encrypted_file",
    "download_file",
    "generate_encryption_key_base64",
    "list_bucket_contents",
    "list_bucket_contents_with_prefix",
    "upload_encrypted_file",
    "upload_file",
]
