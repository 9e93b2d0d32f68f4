"""Temporary-file previews for photos being uploaded."""

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path, PurePath

from listing_photos.domain.photos import RawPhotoFile
from listing_photos.services.previews import (
    PreviewFactory,
    PreviewHandle,
    PreviewReleasedError,
)

logger = logging.getLogger(__name__)


@dataclass
class TempFilePreview(PreviewHandle):
    """Preview backed by a temporary file that is deleted on release."""

    path: Path
    released: bool = False

    @property
    def url(self) -> str:
        return self.path.as_uri()

    def release(self) -> None:
        if self.released:
            raise PreviewReleasedError(f"Preview already released: {self.path}")
        self.released = True
        self.path.unlink(missing_ok=True)
        logger.debug("Released preview %s", self.path)


@dataclass
class TempFilePreviewFactory(PreviewFactory):
    """Writes raw file bytes to a temporary file to serve as a local preview."""

    directory: Path | None = None

    def create(self, file: RawPhotoFile) -> TempFilePreview:
        suffix = PurePath(file.name).suffix
        with tempfile.NamedTemporaryFile(
            prefix="preview-", suffix=suffix, dir=self.directory, delete=False
        ) as handle:
            try:
                handle.write(file.content)
            except OSError:
                handle.close()
                Path(handle.name).unlink(missing_ok=True)
                raise
        return TempFilePreview(path=Path(handle.name).resolve())
