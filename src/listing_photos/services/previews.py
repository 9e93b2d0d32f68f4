"""Local preview handles shown while a photo uploads."""

from typing import Protocol

from listing_photos.domain.photos import RawPhotoFile


class PreviewReleasedError(RuntimeError):
    """Raised when a preview handle is released more than once."""


class PreviewHandle(Protocol):
    """An owned local preview that must be released exactly once."""

    @property
    def url(self) -> str:
        """Locally resolvable URL of the preview."""

    def release(self) -> None:
        """Free the resources backing the preview."""


class PreviewFactory(Protocol):
    """Interface for creating local previews of raw files."""

    def create(self, file: RawPhotoFile) -> PreviewHandle:
        """Create a preview for the given file."""
