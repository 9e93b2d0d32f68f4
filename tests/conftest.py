"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from listing_photos.adapters.photo_api_client import PhotoTransport
from listing_photos.config import Settings
from listing_photos.domain.photos import (
    CompressedPhoto,
    Confirmed,
    Photo,
    RawPhotoFile,
)
from listing_photos.domain.wire import UploadPhotoResult
from listing_photos.services.compression import PhotoCompressor
from listing_photos.services.previews import PreviewFactory, PreviewHandle
from listing_photos.services.store import PhotoStore
from listing_photos.services.uploads import PhotoUploadService, TempIdAllocator


def make_file(name: str = "car.jpg", mime_type: str = "image/jpeg") -> RawPhotoFile:
    content = f"{name}-bytes".encode()
    return RawPhotoFile(name=name, mime_type=mime_type, content=content)


def make_confirmed(photo_id: str, sort_order: int, is_primary: bool = False) -> Photo:
    return Photo(
        id=photo_id,
        origin=Confirmed(
            server_id=photo_id, cdn_url=f"https://cdn.test/{photo_id}.jpg"
        ),
        sort_order=sort_order,
        is_primary=is_primary,
        file_size=1024,
        mime_type="image/jpeg",
        width=800,
        height=600,
        upload_status="success",
        upload_progress=100,
    )


@dataclass
class FakePreview(PreviewHandle):
    """Preview handle that counts releases."""

    file_name: str
    release_count: int = 0

    @property
    def url(self) -> str:
        return f"blob:preview/{self.file_name}"

    def release(self) -> None:
        self.release_count += 1


@dataclass
class FakePreviewFactory(PreviewFactory):
    """Preview factory recording every handle it creates."""

    created: list[FakePreview] = field(default_factory=list)

    def create(self, file: RawPhotoFile) -> FakePreview:
        preview = FakePreview(file_name=file.name)
        self.created.append(preview)
        return preview


@dataclass
class FakePhotoCompressor(PhotoCompressor):
    """Compressor returning the input unchanged, failing for chosen files."""

    failures: dict[str, Exception] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def compress(self, file: RawPhotoFile) -> CompressedPhoto:
        self.calls.append(file.name)
        await asyncio.sleep(0)
        if file.name in self.failures:
            raise self.failures[file.name]
        return CompressedPhoto(
            file=file, width=800, height=600, original_size=file.size
        )


@dataclass
class FakePhotoTransport(PhotoTransport):
    """In-memory photo backend issuing ids p1, p2, ..."""

    upload_failures: dict[str, Exception] = field(default_factory=dict)
    uploads: list[tuple[str, str, int | None, int | None]] = field(
        default_factory=list
    )
    stored: list[UploadPhotoResult] = field(default_factory=list)
    reorders: list[tuple[str, list[str]]] = field(default_factory=list)
    deletes: list[tuple[str, str]] = field(default_factory=list)
    reorder_error: Exception | None = None

    async def upload_photo(
        self,
        listing_id: str,
        file: RawPhotoFile,
        width: int | None = None,
        height: int | None = None,
    ) -> UploadPhotoResult:
        self.uploads.append((listing_id, file.name, width, height))
        await asyncio.sleep(0)
        if file.name in self.upload_failures:
            raise self.upload_failures[file.name]
        result = UploadPhotoResult(
            id=f"p{len(self.stored) + 1}",
            cdn_url=f"https://cdn.test/{file.name}",
            sort_order=len(self.stored),
            is_primary=not self.stored,
            file_size=file.size,
            mime_type=file.mime_type,
            width=width or 0,
            height=height or 0,
        )
        self.stored.append(result)
        return result

    async def reorder_photos(self, listing_id: str, photo_ids: list[str]) -> None:
        if self.reorder_error is not None:
            raise self.reorder_error
        self.reorders.append((listing_id, photo_ids))

    async def delete_photo(self, listing_id: str, photo_id: str) -> None:
        self.deletes.append((listing_id, photo_id))
        self.stored = [result for result in self.stored if result.id != photo_id]

    async def fetch_listing_photos(self, listing_id: str) -> list[UploadPhotoResult]:
        return list(self.stored)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url="https://api.test")


@pytest.fixture
def store() -> PhotoStore:
    return PhotoStore(max_photos=5)


@pytest.fixture
def compressor() -> FakePhotoCompressor:
    return FakePhotoCompressor()


@pytest.fixture
def transport() -> FakePhotoTransport:
    return FakePhotoTransport()


@pytest.fixture
def previews() -> FakePreviewFactory:
    return FakePreviewFactory()


@pytest.fixture
def upload_service(
    store: PhotoStore,
    compressor: FakePhotoCompressor,
    transport: FakePhotoTransport,
    previews: FakePreviewFactory,
) -> PhotoUploadService:
    return PhotoUploadService(
        store=store,
        compressor=compressor,
        transport=transport,
        previews=previews,
        listing_id="listing-1",
        temp_ids=TempIdAllocator(),
    )
