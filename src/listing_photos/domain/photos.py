"""Domain models for listing photos."""

import mimetypes
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Literal

from listing_photos.domain.wire import UploadPhotoResult

UploadStatus = Literal["compressing", "uploading", "success", "error"]

PHOTO_ALLOWED_MIME_TYPES: tuple[str, ...] = (
    "image/jpeg",
    "image/png",
    "image/webp",
    "image/heic",
)


@dataclass(frozen=True)
class RawPhotoFile:
    """A raw image file selected by the user."""

    name: str
    mime_type: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        """Size of the file content in bytes."""
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path | str) -> "RawPhotoFile":
        """Read a file from disk, guessing its MIME type from the extension."""
        resolved = Path(path)
        mime_type, _ = mimetypes.guess_type(resolved.name)
        return cls(
            name=resolved.name,
            mime_type=mime_type or "application/octet-stream",
            content=resolved.read_bytes(),
        )


@dataclass(frozen=True)
class CompressedPhoto:
    """Result of compressing a raw photo."""

    file: RawPhotoFile
    width: int
    height: int
    original_size: int

    @property
    def compressed_size(self) -> int:
        return self.file.size


@dataclass(frozen=True)
class Placeholder:
    """Origin of a photo whose upload is still in progress or has failed."""

    temp_id: str
    local_preview_url: str


@dataclass(frozen=True)
class Confirmed:
    """Origin of a photo the server has accepted."""

    server_id: str
    cdn_url: str


@dataclass(frozen=True)
class Photo:
    """A photo attached to a listing, either pending or confirmed."""

    id: str
    origin: Placeholder | Confirmed
    sort_order: int
    is_primary: bool
    file_size: int
    mime_type: str
    width: int
    height: int
    upload_status: UploadStatus
    upload_progress: int
    error_message: str | None = None

    @property
    def cdn_url(self) -> str:
        if isinstance(self.origin, Confirmed):
            return self.origin.cdn_url
        return ""

    @property
    def local_preview_url(self) -> str | None:
        if isinstance(self.origin, Placeholder):
            return self.origin.local_preview_url
        return None

    @property
    def is_placeholder(self) -> bool:
        return isinstance(self.origin, Placeholder)

    @classmethod
    def placeholder(  # noqa: PLR0913
        cls,
        temp_id: str,
        local_preview_url: str,
        file: RawPhotoFile,
        sort_order: int,
        is_primary: bool,
    ) -> "Photo":
        """Build a placeholder for a file that has just been accepted."""
        return cls(
            id=temp_id,
            origin=Placeholder(temp_id=temp_id, local_preview_url=local_preview_url),
            sort_order=sort_order,
            is_primary=is_primary,
            file_size=file.size,
            mime_type=file.mime_type,
            width=0,
            height=0,
            upload_status="compressing",
            upload_progress=0,
        )

    @classmethod
    def from_upload_result(cls, result: UploadPhotoResult) -> "Photo":
        """Build a confirmed photo from the server's upload response."""
        return cls(
            id=result.id,
            origin=Confirmed(server_id=result.id, cdn_url=result.cdn_url),
            sort_order=result.sort_order,
            is_primary=result.is_primary,
            file_size=result.file_size,
            mime_type=result.mime_type,
            width=result.width,
            height=result.height,
            upload_status="success",
            upload_progress=100,
        )

    def with_changes(self, **changes: object) -> "Photo":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


def filter_supported_files(files: list[RawPhotoFile]) -> list[RawPhotoFile]:
    """Keep only files whose MIME type is an accepted photo format."""
    return [file for file in files if file.mime_type in PHOTO_ALLOWED_MIME_TYPES]
