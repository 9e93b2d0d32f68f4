"""Observable in-memory store for a listing's photo collection."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from listing_photos.domain.photos import Photo

logger = logging.getLogger(__name__)

DEFAULT_MAX_PHOTOS = 20

StoreListener = Callable[["PhotoStore"], None]


class DuplicatePhotoError(ValueError):
    """Raised when a photo id is added to the store twice."""


@dataclass
class PhotoStore:
    """Single source of truth for the ordered photos of one listing.

    Photos are kept keyed by id in insertion order, which is also the display
    order. The store never renumbers ``sort_order`` or moves ``is_primary`` on
    add or remove; callers that need renumbering use ``reorder_photos``.
    Every mutation notifies subscribed listeners with the store itself.
    """

    max_photos: int = DEFAULT_MAX_PHOTOS
    is_loading: bool = False
    _photos: dict[str, Photo] = field(default_factory=dict, init=False, repr=False)
    _listeners: list[StoreListener] = field(
        default_factory=list, init=False, repr=False
    )

    @property
    def photos(self) -> list[Photo]:
        """Photos in display order."""
        return list(self._photos.values())

    def __len__(self) -> int:
        return len(self._photos)

    def get_photo(self, photo_id: str) -> Photo | None:
        return self._photos.get(photo_id)

    def remaining_slots(self) -> int:
        """Number of photos that can still be added before the ceiling."""
        return self.max_photos - len(self._photos)

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_max_photos(self, max_photos: int) -> None:
        self.max_photos = max_photos
        self._notify()

    def set_loading(self, loading: bool) -> None:
        self.is_loading = loading
        self._notify()

    def set_photos(self, photos: list[Photo]) -> None:
        """Replace the whole collection."""
        replacement: dict[str, Photo] = {}
        for photo in photos:
            if photo.id in replacement:
                raise DuplicatePhotoError(f"Duplicate photo id: {photo.id}")
            replacement[photo.id] = photo
        self._photos = replacement
        self._notify()

    def add_photo(self, photo: Photo) -> None:
        """Append a photo; the caller is responsible for its order fields."""
        if photo.id in self._photos:
            raise DuplicatePhotoError(f"Duplicate photo id: {photo.id}")
        self._photos[photo.id] = photo
        self._notify()

    def update_photo(self, photo_id: str, **changes: object) -> None:
        """Merge fields into a photo. Unknown ids are ignored."""
        current = self._photos.get(photo_id)
        if current is None:
            logger.debug("Ignoring update for unknown photo %s", photo_id)
            return
        self._photos[photo_id] = current.with_changes(**changes)
        self._notify()

    def remove_photo(self, photo_id: str) -> None:
        """Delete a photo. Unknown ids are ignored."""
        if self._photos.pop(photo_id, None) is None:
            logger.debug("Ignoring removal of unknown photo %s", photo_id)
            return
        self._notify()

    def reorder_photos(self, photo_ids: list[str]) -> None:
        """Renumber the collection to follow ``photo_ids``.

        The first listed photo becomes primary. Unknown ids are skipped and
        photos missing from ``photo_ids`` are dropped.
        """
        reordered: dict[str, Photo] = {}
        for photo_id in photo_ids:
            photo = self._photos.get(photo_id)
            if photo is None or photo_id in reordered:
                continue
            index = len(reordered)
            reordered[photo_id] = photo.with_changes(
                sort_order=index, is_primary=index == 0
            )
        self._photos = reordered
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Photo store listener failed")
