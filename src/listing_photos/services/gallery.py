"""Gallery operations on photos already attached to a listing."""

import logging
from dataclasses import dataclass

from listing_photos.adapters.photo_api_client import PhotoTransport
from listing_photos.domain.photos import Photo
from listing_photos.services.store import PhotoStore

logger = logging.getLogger(__name__)


@dataclass
class PhotoGalleryService:
    """Loads, deletes and reorders the photos of one listing."""

    store: PhotoStore
    transport: PhotoTransport
    listing_id: str | None

    async def load(self) -> list[Photo]:
        """Replace the store contents with the photos saved on the server."""
        if not self.listing_id:
            return []
        self.store.set_loading(True)
        try:
            results = await self.transport.fetch_listing_photos(self.listing_id)
            photos = sorted(
                (Photo.from_upload_result(result) for result in results),
                key=lambda photo: photo.sort_order,
            )
            self.store.set_photos(photos)
        finally:
            self.store.set_loading(False)
        return photos

    async def delete(self, photo_id: str) -> None:
        """Delete a photo and renumber the remaining ones.

        Placeholders only exist locally and are dropped without a server call.
        """
        if not self.listing_id:
            return
        photo = self.store.get_photo(photo_id)
        if photo is None:
            return
        if not photo.is_placeholder:
            await self.transport.delete_photo(self.listing_id, photo_id)
        self.store.remove_photo(photo_id)
        self.store.reorder_photos([remaining.id for remaining in self.store.photos])
        logger.info("Deleted photo %s from listing %s", photo_id, self.listing_id)

    async def reorder(self, photo_ids: list[str]) -> None:
        """Apply a new order locally, then persist the confirmed photo ids."""
        if not self.listing_id:
            return
        self.store.reorder_photos(photo_ids)
        confirmed_ids = [
            photo.id for photo in self.store.photos if not photo.is_placeholder
        ]
        await self.transport.reorder_photos(self.listing_id, confirmed_ids)

    async def move(self, photo_id: str, offset: int) -> None:
        """Move a photo by ``offset`` positions, clamped to the gallery bounds."""
        ids = [photo.id for photo in self.store.photos]
        if photo_id not in ids:
            return
        current = ids.index(photo_id)
        target = min(max(current + offset, 0), len(ids) - 1)
        if target == current:
            return
        ids.insert(target, ids.pop(current))
        await self.reorder(ids)
