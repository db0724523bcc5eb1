"""
SQLAlchemy models for the gallery store.
All database models inherit from Base (declarative base).

photos.album_id is a plain string column: there is no foreign key to albums,
so deleting an album leaves its photos pointing at the old id.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from gallery_api.database import Base


def generate_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Photo(Base):
    """
    Gallery item: a still image or a referenced YouTube video.
    Tags are stored as JSON text.
    """
    __tablename__ = "photos"

    id = Column(String(36), primary_key=True, default=generate_id)
    url = Column(Text, nullable=False, default="")
    thumbnail = Column(Text, nullable=False, default="")
    title = Column(Text, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    concept = Column(Text, nullable=False, default="")
    album_id = Column(String(36), nullable=False, default="", index=True)
    tags = Column(Text, nullable=False, default="[]")
    # "order" is a reserved word; SQLAlchemy quotes it in emitted SQL
    order = Column("order", Integer, nullable=False, default=0, index=True)
    media_type = Column(String(16), nullable=False, default="image")
    youtube_url = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)


class Album(Base):
    """
    Named grouping of photos.
    is_public is stored as 0/1.
    """
    __tablename__ = "albums"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    cover_url = Column(Text, nullable=False, default="")
    order = Column("order", Integer, nullable=False, default=0, index=True)
    is_public = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)


class SiteContent(Base):
    """Editable page content (home, about, contact), one row per page id."""
    __tablename__ = "site_content"

    id = Column(String(64), primary_key=True)
    content = Column(Text, nullable=False, default="{}")
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
