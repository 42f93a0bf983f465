"""Object storage for uploaded images (Firebase Storage)."""

from __future__ import annotations

import datetime
import io
from typing import Any

from firebase_admin import storage
from PIL import Image, UnidentifiedImageError

MAX_IMAGE_BYTES = 5 * 1024 * 1024
ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "JPEG",
    "image/jpg": "JPEG",
    "image/png": "PNG",
    "image/webp": "WEBP",
}
SIGNED_URL_TTL = datetime.timedelta(days=365)
AVATAR_SIZE = (512, 512)


class InvalidImageError(ValueError):
    """Raised when uploaded bytes are not an accepted image."""


def normalize_image(data: bytes, max_size: tuple[int, int] | None = None) -> tuple[bytes, str]:
    """Decode ``data`` with Pillow, optionally downscale, and re-encode it.

    Returns the encoded bytes and their content type. Re-encoding drops any
    payload hidden after the image data and EXIF metadata.
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidImageError("File bukan gambar yang valid") from e

    fmt = (img.format or "").upper()
    if fmt not in {"JPEG", "PNG", "WEBP"}:
        raise InvalidImageError("Format file harus JPG, PNG, atau WebP")

    if max_size:
        img.thumbnail(max_size)
    if fmt == "JPEG" and img.mode not in ("RGB", "L"):
        img = img.convert("RGB")

    out = io.BytesIO()
    img.save(out, format=fmt)
    return out.getvalue(), f"image/{fmt.lower()}"


class MediaStorage:
    """Uploads blobs to the configured bucket and hands out signed URLs."""

    def __init__(self, bucket_name: str | None = None) -> None:
        self.bucket_name = bucket_name

    def _bucket(self) -> Any:
        return storage.bucket(self.bucket_name)

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Upload ``data`` to ``path`` and return a signed URL valid for a year."""
        blob = self._bucket().blob(path)
        blob.upload_from_string(data, content_type=content_type)
        return blob.generate_signed_url(expiration=SIGNED_URL_TTL)

    def delete(self, path: str) -> None:
        self._bucket().blob(path).delete()
