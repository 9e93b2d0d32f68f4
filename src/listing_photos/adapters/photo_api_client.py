"""Seller photo API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from listing_photos.domain.photos import RawPhotoFile
from listing_photos.domain.wire import (
    DeletePhotoRequest,
    ReorderPhotosRequest,
    UploadPhotoRequest,
    UploadPhotoResult,
)


class PhotoApiError(RuntimeError):
    """Raised when the photo API answers with a non-success status."""

    def __init__(self, operation: str, status_code: int, body: str = "") -> None:
        self.operation = operation
        self.status_code = status_code
        self.body = body
        super().__init__(f"{operation} failed: {status_code} {body}".rstrip())


class PhotoTransport(Protocol):
    """Interface for listing photo RPC calls."""

    async def upload_photo(
        self,
        listing_id: str,
        file: RawPhotoFile,
        width: int | None = None,
        height: int | None = None,
    ) -> UploadPhotoResult:
        """Upload a photo and return the stored record."""

    async def reorder_photos(self, listing_id: str, photo_ids: list[str]) -> None:
        """Persist a new photo order."""

    async def delete_photo(self, listing_id: str, photo_id: str) -> None:
        """Delete a photo from a listing."""

    async def fetch_listing_photos(self, listing_id: str) -> list[UploadPhotoResult]:
        """Return the stored photos of a listing ordered by sort order."""


@dataclass
class HttpxPhotoApiClient(PhotoTransport):
    """Photo API client implemented with httpx."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, base_url: str, token: str | None = None, timeout: float = 30.0
    ) -> "HttpxPhotoApiClient":
        """Create a photo API client with a managed httpx session."""
        headers = {"Authorization": f"Bearer {token}"} if token else None
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(headers=headers, timeout=timeout),
        )

    async def upload_photo(
        self,
        listing_id: str,
        file: RawPhotoFile,
        width: int | None = None,
        height: int | None = None,
    ) -> UploadPhotoResult:
        """Upload base64-encoded photo bytes."""
        request = UploadPhotoRequest.from_bytes(
            listing_id=listing_id,
            content=file.content,
            mime_type=file.mime_type,
            width=width,
            height=height,
        )
        response = await self.http_client.post(
            f"{self.base_url}/api/seller/uploadPhoto",
            json=request.model_dump(by_alias=True),
        )
        _raise_for_status(response, "Upload")
        return UploadPhotoResult.model_validate(response.json())

    async def reorder_photos(self, listing_id: str, photo_ids: list[str]) -> None:
        """Persist the given photo order."""
        request = ReorderPhotosRequest(listing_id=listing_id, photo_ids=photo_ids)
        response = await self.http_client.post(
            f"{self.base_url}/api/seller/reorderPhotos",
            json=request.to_payload(),
        )
        _raise_for_status(response, "Reorder")

    async def delete_photo(self, listing_id: str, photo_id: str) -> None:
        """Delete a single photo."""
        request = DeletePhotoRequest(listing_id=listing_id, photo_id=photo_id)
        response = await self.http_client.post(
            f"{self.base_url}/api/seller/deletePhoto",
            json=request.model_dump(by_alias=True),
        )
        _raise_for_status(response, "Delete")

    async def fetch_listing_photos(self, listing_id: str) -> list[UploadPhotoResult]:
        """Fetch the listing's photos ordered by sort order."""
        response = await self.http_client.get(
            f"{self.base_url}/api/seller/ListingPhotos",
            params={
                "$filter": f"listingId eq '{listing_id}'",
                "$orderby": "sortOrder asc",
            },
        )
        if not response.is_success:
            raise PhotoApiError("Fetch photos", response.status_code)
        payload = response.json()
        rows = payload.get("value") or []
        return [UploadPhotoResult.model_validate(row) for row in rows]

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _raise_for_status(response: httpx.Response, operation: str) -> None:
    """Raise a PhotoApiError carrying the status code and body text."""
    if response.is_success:
        return
    raise PhotoApiError(operation, response.status_code, response.text)
