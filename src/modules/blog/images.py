"""Blog header images: downscale, re-encode as WebP, store."""

from __future__ import annotations

import asyncio
import io
import logging
import re
import time
from pathlib import PurePath

from PIL import Image, ImageOps, UnidentifiedImageError

from src.exceptions import PhotoUploadException, ValidationException
from src.modules.blog.constants import (
    HEADER_IMAGE_MAX_BYTES,
    HEADER_IMAGE_MAX_WIDTH,
    HEADER_IMAGE_PREFIX,
    HEADER_IMAGE_WEBP_QUALITY,
)
from src.modules.storage.base import PhotoStore, StorageError

logger = logging.getLogger(__name__)


def compress_image(data: bytes, max_width: int = HEADER_IMAGE_MAX_WIDTH) -> bytes:
    """Resize to at most ``max_width`` (never enlarging) and encode as WebP."""
    try:
        with Image.open(io.BytesIO(data)) as im:
            im = ImageOps.exif_transpose(im)
            if im.width > max_width:
                ratio = max_width / float(im.width)
                im = im.resize((max_width, max(1, int(im.height * ratio))), Image.Resampling.LANCZOS)
            im = im.convert("RGBA" if im.mode in ("RGBA", "LA", "P") else "RGB")
            out = io.BytesIO()
            im.save(out, format="WEBP", quality=HEADER_IMAGE_WEBP_QUALITY)
            return out.getvalue()
    except (UnidentifiedImageError, OSError) as exc:
        raise ValidationException(
            "File is not a readable image", [{"field": "file", "message": str(exc)}]
        ) from exc


def header_image_path(filename: str, timestamp_ms: int | None = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    safe_name = re.sub(r"[^a-zA-Z0-9]", "-", PurePath(filename).stem).lower() or "image"
    return f"{HEADER_IMAGE_PREFIX}/{timestamp_ms}-{safe_name}.webp"


async def upload_header_image(
    store: PhotoStore,
    data: bytes,
    filename: str,
    alt_text: str,
    request_host: str | None = None,
) -> dict:
    if len(data) > HEADER_IMAGE_MAX_BYTES:
        raise ValidationException(
            "File too large", [{"field": "file", "message": "Maximum size: 10MB"}]
        )
    compressed = await asyncio.to_thread(compress_image, data)
    path = header_image_path(filename)
    try:
        await store.put(path, compressed, "image/webp")
    except StorageError as exc:
        raise PhotoUploadException(f"Header image upload failed: {exc}") from exc
    logger.info("Blog image %s stored (%d -> %d bytes)", path, len(data), len(compressed))
    return {
        "storage_path": path,
        "alt_text": alt_text,
        "public_url": store.public_url(path, request_host),
    }
