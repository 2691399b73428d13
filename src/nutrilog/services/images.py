"""Meal image hosting interface and helpers."""

import base64
from typing import Protocol

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


class ImageStorage(Protocol):
    """Interface for the image host."""

    def upload(self, image_bytes: bytes, content_type: str) -> str:
        """Store an image and return its public URL."""

    def delete(self, image_url: str) -> None:
        """Remove a previously uploaded image."""


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{detect_mime_type(image_bytes)};base64,{encoded}"
