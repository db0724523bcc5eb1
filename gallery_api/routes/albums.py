"""
Album routes: list, create, partial update and delete albums.
Deleting an album does not touch the photos that reference it.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from typing import Optional
import logging

from gallery_api.database import get_db
from gallery_api.models import Album, generate_id
from gallery_api.schemas import (
    AlbumCreate,
    AlbumUpdate,
    AlbumResponse,
    AlbumListResponse,
    CreatedResponse,
    SuccessResponse,
)
from gallery_api.utils.jwt_auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/albums", tags=["albums"])


@router.get("", response_model=AlbumListResponse)
async def list_albums(db: AsyncSession = Depends(get_db)):
    """
    List all albums (public and private) ordered by display order.
    Visibility filtering is left to the caller.
    """
    result = await db.execute(select(Album).order_by(Album.order.asc()))
    albums = result.scalars().all()

    logger.info(f"Retrieved {len(albums)} albums")

    return AlbumListResponse(albums=[AlbumResponse.model_validate(album) for album in albums])


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_album(
    payload: AlbumCreate,
    db: AsyncSession = Depends(get_db),
    admin: Optional[dict] = Depends(require_admin)
):
    """
    Create an album.

    Raises:
        HTTPException: 400 if name is missing or empty
    """
    if not payload.name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name is required"
        )

    album = Album(
        id=generate_id(),
        name=payload.name,
        description=payload.description,
        cover_url=payload.cover_url,
        order=payload.order,
        is_public=1 if payload.is_public else 0,
    )
    db.add(album)
    await db.commit()

    logger.info(f"Created album {album.id}: {album.name!r}")

    return CreatedResponse(id=album.id)


@router.put("/{album_id}", response_model=SuccessResponse)
async def update_album(
    album_id: str,
    payload: AlbumUpdate,
    db: AsyncSession = Depends(get_db),
    admin: Optional[dict] = Depends(require_admin)
):
    """
    Apply a partial update to an album.

    The admin dashboard reorders albums by sending one of these per album;
    each call commits on its own.

    Raises:
        HTTPException: 400 if the body carries no recognised field
    """
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )

    if "is_public" in changes:
        changes["is_public"] = 1 if changes["is_public"] else 0

    result = await db.execute(
        update(Album).where(Album.id == album_id).values(**changes)
    )
    await db.commit()

    logger.info(f"Updated album {album_id}: fields={sorted(changes)}, rows={result.rowcount}")

    return SuccessResponse()


@router.delete("/{album_id}", response_model=SuccessResponse)
async def delete_album(
    album_id: str,
    db: AsyncSession = Depends(get_db),
    admin: Optional[dict] = Depends(require_admin)
):
    """Delete an album. Photos keep their albumId; unknown ids are not an error."""
    result = await db.execute(delete(Album).where(Album.id == album_id))
    await db.commit()

    logger.info(f"Deleted album {album_id}: rows={result.rowcount}")

    return SuccessResponse()
