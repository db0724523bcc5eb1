"""
Pydantic schemas for request and response data validation.
Wire format is camelCase (albumId, mediaType, ...); attributes are snake_case
and match the model columns so update payloads map straight onto them.
"""
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any, List, Literal, Optional

from gallery_api.utils.serialization import decode_tags
from gallery_api.utils.youtube import extract_video_id

MediaType = Literal["image", "video"]


class CamelModel(BaseModel):
    """Base schema accepting both camelCase and snake_case keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ==================== PHOTOS ====================

class PhotoCreate(CamelModel):
    """
    Request schema for POST /photos.
    url is required for images, youtubeUrl for videos; both checks happen in
    the route so they can return their own messages.
    """
    url: Optional[str] = None
    thumbnail: Optional[str] = None
    title: str = ""
    description: str = ""
    concept: str = ""
    album_id: str = ""
    tags: List[str] = Field(default_factory=list)
    order: int = 0
    media_type: MediaType = "image"
    youtube_url: str = ""

    @field_validator("title", "description", "concept", "album_id", "youtube_url", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags(cls, v):
        return [] if v is None else v

    @field_validator("order", mode="before")
    @classmethod
    def null_order(cls, v):
        return 0 if v is None else v

    @field_validator("media_type", mode="before")
    @classmethod
    def null_media_type(cls, v):
        return "image" if v is None else v


class PhotoUpdate(CamelModel):
    """
    Request schema for PUT /photos/{id}.
    Only keys present (and not null) in the body are written.
    """
    url: Optional[str] = None
    thumbnail: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    concept: Optional[str] = None
    album_id: Optional[str] = None
    tags: Optional[List[str]] = None
    order: Optional[int] = None
    media_type: Optional[MediaType] = None
    youtube_url: Optional[str] = None


class PhotoResponse(CamelModel):
    """
    Response schema for one photo in GET /photos.
    """
    id: str
    url: str = ""
    thumbnail: str = ""
    title: str = ""
    description: str = ""
    concept: str = ""
    album_id: str = ""
    tags: List[str] = Field(default_factory=list)
    order: int = 0
    media_type: str = "image"
    youtube_url: str = ""
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, v):
        return decode_tags(v)

    @field_validator("media_type", mode="before")
    @classmethod
    def default_media_type(cls, v):
        return v or "image"

    @computed_field(alias="videoId")
    @property
    def video_id(self) -> Optional[str]:
        if self.media_type != "video":
            return None
        return extract_video_id(self.youtube_url)


class PhotoListResponse(BaseModel):
    photos: List[PhotoResponse]


# ==================== ALBUMS ====================

class AlbumCreate(CamelModel):
    """Request schema for POST /albums. name is checked in the route."""
    name: Optional[str] = None
    description: str = ""
    cover_url: str = ""
    order: int = 0
    is_public: bool = True

    @field_validator("description", "cover_url", mode="before")
    @classmethod
    def null_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("order", mode="before")
    @classmethod
    def null_order(cls, v):
        return 0 if v is None else v

    @field_validator("is_public", mode="before")
    @classmethod
    def null_is_public(cls, v):
        return True if v is None else v


class AlbumUpdate(CamelModel):
    """Request schema for PUT /albums/{id}."""
    name: Optional[str] = None
    description: Optional[str] = None
    cover_url: Optional[str] = None
    order: Optional[int] = None
    is_public: Optional[bool] = None


class AlbumResponse(CamelModel):
    id: str
    name: str
    description: str = ""
    cover_url: str = ""
    order: int = 0
    is_public: bool = True
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AlbumListResponse(BaseModel):
    albums: List[AlbumResponse]


# ==================== CONTENT ====================

class ContentResponse(CamelModel):
    """
    Response schema for GET /content/{page}.
    content and updatedAt are null for pages that were never saved.
    """
    id: str
    content: Any = None
    updated_at: Optional[datetime] = None


# ==================== COMMON ====================

class CreatedResponse(BaseModel):
    id: str
    success: bool = True


class SuccessResponse(BaseModel):
    success: bool = True


class HealthResponse(BaseModel):
    status: str
    timestamp: str


# ==================== UPLOADS ====================

class Base64UploadRequest(CamelModel):
    """
    Request schema for POST /base64 on the upload proxy.
    apiKey may be omitted when the proxy has IMGBB_API_KEY configured.
    """
    image_base64: Optional[str] = None
    api_key: Optional[str] = None


class Base64UploadResponse(CamelModel):
    url: str
    thumbnail: str
    delete_url: Optional[str] = None
