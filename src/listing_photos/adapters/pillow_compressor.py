"""Pillow-backed photo compression."""

import asyncio
import io
from dataclasses import dataclass
from pathlib import PurePath

from PIL import Image, UnidentifiedImageError
from pillow_heif import register_heif_opener

from listing_photos.domain.photos import CompressedPhoto, RawPhotoFile
from listing_photos.services.compression import CompressionError, PhotoCompressor

MAX_DIMENSION = 2048
TARGET_MAX_SIZE_BYTES = 2 * 1024 * 1024

INITIAL_QUALITY = 85
MIN_QUALITY = 30
QUALITY_STEP = 10
FALLBACK_JPEG_QUALITY = 70

_FORMATS: dict[str, tuple[str, str]] = {
    "image/jpeg": ("JPEG", ".jpg"),
    "image/png": ("PNG", ".png"),
    "image/webp": ("WEBP", ".webp"),
}
_JPEG = "image/jpeg"

register_heif_opener()


@dataclass
class PillowPhotoCompressor(PhotoCompressor):
    """Resizes and re-encodes photos, dropping EXIF metadata on the way.

    Images larger than ``max_dimension`` on either side are scaled down
    keeping their aspect ratio. Quality is lowered step by step until the
    output fits ``target_bytes``; formats other than JPEG that still do not
    fit are converted to JPEG. HEIC input is always written as JPEG.
    """

    max_dimension: int = MAX_DIMENSION
    target_bytes: int = TARGET_MAX_SIZE_BYTES

    async def compress(self, file: RawPhotoFile) -> CompressedPhoto:
        """Compress the file without blocking the event loop."""
        return await asyncio.to_thread(self._compress_sync, file)

    def _compress_sync(self, file: RawPhotoFile) -> CompressedPhoto:
        with _open_image(file) as image:
            width, height = _fit_within(image.width, image.height, self.max_dimension)
            if (width, height) == image.size:
                output_type, data = self._encode_within_target(image, file.mime_type)
            else:
                with image.resize((width, height), Image.Resampling.LANCZOS) as resized:
                    output_type, data = self._encode_within_target(
                        resized, file.mime_type
                    )

        extension = _FORMATS[output_type][1]
        compressed = RawPhotoFile(
            name=str(PurePath(file.name).with_suffix(extension)),
            mime_type=output_type,
            content=data,
        )
        return CompressedPhoto(
            file=compressed, width=width, height=height, original_size=file.size
        )

    def _encode_within_target(
        self, image: Image.Image, mime_type: str
    ) -> tuple[str, bytes]:
        output_type = mime_type if mime_type in _FORMATS else _JPEG
        quality = INITIAL_QUALITY
        data = _encode(image, output_type, quality)
        while len(data) > self.target_bytes and quality > MIN_QUALITY:
            quality -= QUALITY_STEP
            data = _encode(image, output_type, quality)

        if len(data) > self.target_bytes and output_type != _JPEG:
            output_type = _JPEG
            data = _encode(image, output_type, FALLBACK_JPEG_QUALITY)
        return output_type, data


def read_image_dimensions(file: RawPhotoFile) -> tuple[int, int]:
    """Return the (width, height) of an image without re-encoding it."""
    with _open_image(file) as image:
        return image.width, image.height


def _open_image(file: RawPhotoFile) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(file.content))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise CompressionError(f"Cannot read image {file.name}: {exc}") from exc
    return image


def _fit_within(width: int, height: int, max_dimension: int) -> tuple[int, int]:
    if width <= max_dimension and height <= max_dimension:
        return width, height
    ratio = min(max_dimension / width, max_dimension / height)
    return max(round(width * ratio), 1), max(round(height * ratio), 1)


def _encode(image: Image.Image, mime_type: str, quality: int) -> bytes:
    pil_format = _FORMATS[mime_type][0]
    if pil_format == "JPEG" and image.mode not in {"RGB", "L"}:
        image = image.convert("RGB")
    buffer = io.BytesIO()
    # Saving without passing exif drops the source metadata.
    image.save(buffer, format=pil_format, quality=quality)
    return buffer.getvalue()
