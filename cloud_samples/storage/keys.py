"""Customer-supplied encryption keys (SSE-C).

Keys are raw 32-byte AES-256 keys. They are generated by the caller, handed
to the store on every upload and download of the object they protect, and
never persisted or logged by this package.
"""

from __future__ import annotations

import base64
import binascii

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from cloud_samples.storage.contracts import InvalidArgumentError

KEY_SIZE_BYTES = 32


def generate_encryption_key() -> bytes:
    """Return a fresh random AES-256 key from the OS CSPRNG."""
    return AESGCM.generate_key(bit_length=KEY_SIZE_BYTES * 8)


def encode_key(key: bytes) -> str:
    """Base64 text form of a key, as accepted by ``decode_key``."""
    return base64.b64encode(key).decode("ascii")


def decode_key(text: str) -> bytes:
    """Parse a base64 key.

    Raises:
        InvalidArgumentError: If ``text`` is not valid base64 or does not
            decode to exactly 32 bytes.
    """
    try:
        key = base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidArgumentError(
            op="decode_key", bucket=None, key=None, message=f"not valid base64: {exc}"
        ) from exc
    if len(key) != KEY_SIZE_BYTES:
        raise InvalidArgumentError(
            op="decode_key",
            bucket=None,
            key=None,
            message=f"expected {KEY_SIZE_BYTES} bytes, got {len(key)}",
        )
    return key


__all__ = ["KEY_SIZE_BYTES", "generate_encryption_key", "encode_key", "decode_key"]
