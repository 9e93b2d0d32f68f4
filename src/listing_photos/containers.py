"""Dependency container wiring for the photo pipeline."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from listing_photos.adapters.photo_api_client import (
    HttpxPhotoApiClient,
    PhotoTransport,
)
from listing_photos.adapters.pillow_compressor import PillowPhotoCompressor
from listing_photos.adapters.temp_file_previews import TempFilePreviewFactory
from listing_photos.app_logging import configure_logging
from listing_photos.config import Settings, parse_listing_id
from listing_photos.services.compression import PhotoCompressor
from listing_photos.services.gallery import PhotoGalleryService
from listing_photos.services.previews import PreviewFactory
from listing_photos.services.store import PhotoStore
from listing_photos.services.uploads import PhotoUploadService


@dataclass
class AppContainer:
    """Holds the dependencies of one listing's photo editor."""

    settings: Settings
    store: PhotoStore
    transport: PhotoTransport
    compressor: PhotoCompressor
    previews: PreviewFactory
    upload_service: PhotoUploadService
    gallery_service: PhotoGalleryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None, listing_id: str | None = None
) -> AppContainer:
    """Create the default dependency container."""
    configure_logging()
    resolved_settings = settings or Settings()
    resolved_listing_id = parse_listing_id(listing_id)
    store = PhotoStore(max_photos=resolved_settings.max_photos)
    api_client = HttpxPhotoApiClient.create(
        base_url=resolved_settings.api_base_url,
        token=resolved_settings.api_token,
        timeout=resolved_settings.request_timeout_seconds,
    )
    compressor = PillowPhotoCompressor(
        max_dimension=resolved_settings.compression_max_dimension,
        target_bytes=resolved_settings.compression_target_bytes,
    )
    previews = TempFilePreviewFactory(directory=resolved_settings.preview_dir)
    upload_service = PhotoUploadService(
        store=store,
        compressor=compressor,
        transport=api_client,
        previews=previews,
        listing_id=resolved_listing_id,
    )
    gallery_service = PhotoGalleryService(
        store=store,
        transport=api_client,
        listing_id=resolved_listing_id,
    )

    async def close_resources() -> None:
        await api_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        transport=api_client,
        compressor=compressor,
        previews=previews,
        upload_service=upload_service,
        gallery_service=gallery_service,
        close_resources=close_resources,
    )
