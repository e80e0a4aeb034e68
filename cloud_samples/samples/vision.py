"""Text detection samples using Google Cloud Vision.

Credentials come from ``GOOGLE_APPLICATION_CREDENTIALS`` as usual for the
Google client libraries.
"""

from __future__ import annotations

import logging
from pathlib import Path

from google.cloud import vision

logger = logging.getLogger(__name__)


class VisionError(Exception):
    """Text detection failed, locally or in the Vision API."""


def _detect(image: vision.Image, source: str, client) -> str:
    client = client or vision.ImageAnnotatorClient()
    response = client.text_detection(image=image)
    if response.error.message:
        raise VisionError(f"text detection failed for {source}: {response.error.message}")

    texts = response.text_annotations
    text = texts[0].description if texts else ""
    logger.info("Detected %d characters of text in %s", len(text), source)
    print(text)
    return text


def detect_document_text(image_path: str | Path, client=None) -> str:
    """Print and return the text found in a local image file."""
    try:
        content = Path(image_path).read_bytes()
    except OSError as exc:
        raise VisionError(f"cannot read image {image_path}: {exc}") from exc
    return _detect(vision.Image(content=content), str(image_path), client)


def detect_document_text_gcs(image_uri: str, client=None) -> str:
    """Same as ``detect_document_text`` for an image addressed by URI, e.g. ``gs://bucket/image.png``."""
    image = vision.Image(source=vision.ImageSource(image_uri=image_uri))
    return _detect(image, image_uri, client)
