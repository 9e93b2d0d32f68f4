"""Photo compression interface."""

from typing import Protocol

from listing_photos.domain.photos import CompressedPhoto, RawPhotoFile


class CompressionError(RuntimeError):
    """Raised when a photo cannot be decoded or re-encoded."""


class PhotoCompressor(Protocol):
    """Interface for shrinking a photo before upload."""

    async def compress(self, file: RawPhotoFile) -> CompressedPhoto:
        """Return the compressed file with its final dimensions."""
