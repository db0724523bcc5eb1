"""
Photo routes: list, create, partial update and delete gallery items.
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func, or_
from typing import Optional
import logging

from gallery_api.config import settings
from gallery_api.database import get_db
from gallery_api.models import Photo, generate_id
from gallery_api.schemas import (
    PhotoCreate,
    PhotoUpdate,
    PhotoResponse,
    PhotoListResponse,
    CreatedResponse,
    SuccessResponse,
)
from gallery_api.utils.jwt_auth import require_admin
from gallery_api.utils.serialization import encode_tags, parse_limit
from gallery_api.utils.youtube import extract_video_id, thumbnail_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/photos", tags=["photos"])


@router.get("", response_model=PhotoListResponse)
async def list_photos(
    album_id: Optional[str] = Query(None, alias="albumId"),
    limit: Optional[str] = Query(None),
    q: Optional[str] = Query(None, description="Case-insensitive match on title or tags"),
    db: AsyncSession = Depends(get_db)
):
    """
    List photos ordered by display order, newest first within the same order.

    Args:
        album_id: Only return photos of this album (empty means all)
        limit: Maximum number of photos; unparseable values use the default
        q: Optional search term
        db: Database session (injected by FastAPI dependency)

    Returns:
        PhotoListResponse: {"photos": [...]}
    """
    row_limit = parse_limit(limit, settings.DEFAULT_PHOTO_LIMIT)

    query = select(Photo)
    if album_id:
        query = query.where(Photo.album_id == album_id)
    if q and q.strip():
        term = q.strip().lower()
        query = query.where(or_(
            func.lower(Photo.title).contains(term, autoescape=True),
            func.lower(Photo.tags).contains(term, autoescape=True),
        ))

    query = query.order_by(Photo.order.asc(), Photo.created_at.desc()).limit(row_limit)
    result = await db.execute(query)
    photos = result.scalars().all()

    logger.info(f"Retrieved {len(photos)} photos (album: {album_id or 'all'}, limit: {row_limit})")

    return PhotoListResponse(photos=[PhotoResponse.model_validate(photo) for photo in photos])


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_photo(
    payload: PhotoCreate,
    db: AsyncSession = Depends(get_db),
    admin: Optional[dict] = Depends(require_admin)
):
    """
    Create a photo or video entry.

    Images need a url; videos need a youtubeUrl and may leave url empty.
    The thumbnail defaults to the url, or to the YouTube still for videos
    that have neither.

    Raises:
        HTTPException: 400 if the required url / youtubeUrl is missing
    """
    if not payload.url and payload.media_type != "video":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="URL is required for images"
        )

    if payload.media_type == "video" and not payload.youtube_url:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="YouTube URL is required for videos"
        )

    url = payload.url or ""
    thumbnail = payload.thumbnail or url
    if not thumbnail and payload.media_type == "video":
        video_id = extract_video_id(payload.youtube_url)
        if video_id:
            thumbnail = thumbnail_url(video_id)

    photo = Photo(
        id=generate_id(),
        url=url,
        thumbnail=thumbnail,
        title=payload.title,
        description=payload.description,
        concept=payload.concept,
        album_id=payload.album_id,
        tags=encode_tags(payload.tags),
        order=payload.order,
        media_type=payload.media_type,
        youtube_url=payload.youtube_url,
    )
    db.add(photo)
    await db.commit()

    logger.info(f"Created {photo.media_type} entry: ID {photo.id}")

    return CreatedResponse(id=photo.id)


@router.put("/{photo_id}", response_model=SuccessResponse)
async def update_photo(
    photo_id: str,
    payload: PhotoUpdate,
    db: AsyncSession = Depends(get_db),
    admin: Optional[dict] = Depends(require_admin)
):
    """
    Apply a partial update; fields missing from the body keep their value.

    Raises:
        HTTPException: 400 if the body carries no recognised field
    """
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )

    if "tags" in changes:
        changes["tags"] = encode_tags(changes["tags"])

    result = await db.execute(
        update(Photo).where(Photo.id == photo_id).values(**changes)
    )
    await db.commit()

    logger.info(f"Updated photo {photo_id}: fields={sorted(changes)}, rows={result.rowcount}")

    return SuccessResponse()


@router.delete("/{photo_id}", response_model=SuccessResponse)
async def delete_photo(
    photo_id: str,
    db: AsyncSession = Depends(get_db),
    admin: Optional[dict] = Depends(require_admin)
):
    """Delete a photo. Unknown ids are not an error."""
    result = await db.execute(delete(Photo).where(Photo.id == photo_id))
    await db.commit()

    logger.info(f"Deleted photo {photo_id}: rows={result.rowcount}")

    return SuccessResponse()
