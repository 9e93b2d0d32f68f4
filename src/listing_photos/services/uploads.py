"""Upload pipeline turning selected files into confirmed listing photos."""

import itertools
import logging
from dataclasses import dataclass

from listing_photos.adapters.photo_api_client import PhotoTransport
from listing_photos.domain.photos import Photo, RawPhotoFile
from listing_photos.services.compression import PhotoCompressor
from listing_photos.services.previews import PreviewFactory, PreviewHandle
from listing_photos.services.store import DuplicatePhotoError, PhotoStore

logger = logging.getLogger(__name__)

DEFAULT_UPLOAD_ERROR_MESSAGE = "Erreur lors de l'envoi de la photo"
TEMP_ID_PREFIX = "temp-"

PROGRESS_COMPRESSING = 20
PROGRESS_UPLOADING = 50


class TempIdAllocator:
    """Monotonic source of temporary photo ids, never reused."""

    def __init__(self, prefix: str = TEMP_ID_PREFIX) -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def next_id(self) -> str:
        return f"{self._prefix}{next(self._counter)}"


# One allocator per process so temporary ids stay unique across services.
SESSION_TEMP_IDS = TempIdAllocator()


@dataclass
class PhotoUploadService:
    """Drives each selected file from placeholder to confirmed photo.

    Files are handled one after another so that every placeholder's
    ``sort_order`` is the collection size observed right before it is
    inserted. A failing file leaves its placeholder in ``error`` state and
    the batch carries on; nothing is raised to the caller.

    Overlapping ``process_files`` calls are not serialized: each checks
    capacity on its own, so together they may exceed ``max_photos`` and
    interleave their ``sort_order`` values.
    """

    store: PhotoStore
    compressor: PhotoCompressor
    transport: PhotoTransport
    previews: PreviewFactory
    listing_id: str | None
    temp_ids: TempIdAllocator = SESSION_TEMP_IDS

    async def process_files(self, files: list[RawPhotoFile]) -> None:
        """Compress and upload files, tracking each one in the store."""
        listing_id = self.listing_id
        if not listing_id:
            return

        remaining_slots = max(self.store.remaining_slots(), 0)
        batch = list(files)[:remaining_slots]
        if len(batch) < len(files):
            logger.info(
                "Dropping %d photo(s) over the limit of %d for listing %s",
                len(files) - len(batch),
                self.store.max_photos,
                listing_id,
            )

        for file in batch:
            await self._process_file(listing_id, file)

    async def _process_file(self, listing_id: str, file: RawPhotoFile) -> None:
        temp_id = self.temp_ids.next_id()
        preview: PreviewHandle | None = None
        try:
            preview = self.previews.create(file)
            self._add_placeholder(temp_id, file, preview.url)
            self.store.update_photo(
                temp_id,
                upload_status="compressing",
                upload_progress=PROGRESS_COMPRESSING,
            )
            compressed = await self.compressor.compress(file)

            self.store.update_photo(
                temp_id,
                upload_status="uploading",
                upload_progress=PROGRESS_UPLOADING,
            )
            result = await self.transport.upload_photo(
                listing_id,
                compressed.file,
                width=compressed.width,
                height=compressed.height,
            )
            confirmed = Photo.from_upload_result(result)
            if self.store.get_photo(confirmed.id) is not None:
                raise DuplicatePhotoError(f"Duplicate photo id: {confirmed.id}")
        except Exception as exc:
            if preview is not None:
                preview.release()
            self._mark_failed(temp_id, file, exc)
            return

        # No await between the swap steps, so the duplicate check still holds.
        self.store.remove_photo(temp_id)
        preview.release()
        self.store.add_photo(confirmed)

    def _add_placeholder(
        self, temp_id: str, file: RawPhotoFile, local_preview_url: str
    ) -> None:
        position = len(self.store)
        self.store.add_photo(
            Photo.placeholder(
                temp_id=temp_id,
                local_preview_url=local_preview_url,
                file=file,
                sort_order=position,
                is_primary=position == 0,
            )
        )

    def _mark_failed(self, temp_id: str, file: RawPhotoFile, exc: Exception) -> None:
        message = str(exc) or DEFAULT_UPLOAD_ERROR_MESSAGE
        logger.warning("Photo %s (%s) failed: %s", temp_id, file.name, message)
        if self.store.get_photo(temp_id) is None:
            # Failed before its placeholder existed; keep the file visible.
            self._add_placeholder(temp_id, file, "")
        self.store.update_photo(
            temp_id,
            upload_status="error",
            upload_progress=0,
            error_message=message,
        )
