"""Request and response payloads for the seller photo API."""

import base64
import json

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UploadPhotoResult(BaseModel):
    """Photo record returned by the server after an upload."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("ID", "id"))
    cdn_url: str = Field(alias="cdnUrl")
    sort_order: int = Field(alias="sortOrder", ge=0)
    is_primary: bool = Field(alias="isPrimary")
    file_size: int = Field(alias="fileSize", ge=0)
    mime_type: str = Field(alias="mimeType")
    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)


class UploadPhotoRequest(BaseModel):
    """Body of an upload call; the file travels base64-encoded."""

    model_config = ConfigDict(populate_by_name=True)

    listing_id: str = Field(alias="listingId")
    content: str
    mime_type: str = Field(alias="mimeType")
    file_size: int = Field(alias="fileSize", ge=0)
    width: int = 0
    height: int = 0

    @classmethod
    def from_bytes(  # noqa: PLR0913
        cls,
        listing_id: str,
        content: bytes,
        mime_type: str,
        width: int | None,
        height: int | None,
    ) -> "UploadPhotoRequest":
        return cls(
            listing_id=listing_id,
            content=base64.b64encode(content).decode("ascii"),
            mime_type=mime_type,
            file_size=len(content),
            width=width or 0,
            height=height or 0,
        )


class ReorderPhotosRequest(BaseModel):
    """Body of a reorder call."""

    model_config = ConfigDict(populate_by_name=True)

    listing_id: str = Field(alias="listingId")
    photo_ids: list[str] = Field(alias="photoIds")

    def to_payload(self) -> dict[str, object]:
        """Serialize for the backend, which expects the id list JSON-encoded."""
        return {
            "listingId": self.listing_id,
            "photoIds": json.dumps(self.photo_ids),
        }


class DeletePhotoRequest(BaseModel):
    """Body of a delete call."""

    model_config = ConfigDict(populate_by_name=True)

    listing_id: str = Field(alias="listingId")
    photo_id: str = Field(alias="photoId")
