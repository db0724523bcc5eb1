"""
Site content routes for the editable home / about / contact pages.
Content is an opaque JSON document stored whole, one row per page id.
"""
from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from typing import Any, Optional
import logging

from gallery_api.database import get_db
from gallery_api.models import SiteContent, utcnow
from gallery_api.schemas import ContentResponse, SuccessResponse
from gallery_api.utils.jwt_auth import require_admin
from gallery_api.utils.serialization import decode_content, encode_content

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def unwrap_content(body: Any) -> Any:
    """
    Accept both request shapes for PUT /content/{page}.

    {"content": ...} stores the inner value when it is an object, an array
    or any other non-empty value; a null, false, zero or empty-string
    "content" member leaves the whole body to be stored as-is.
    """
    if not isinstance(body, dict):
        return body
    inner = body.get("content")
    if isinstance(inner, (dict, list)) or inner:
        return inner
    return body


def build_upsert(dialect_name: str, page: str, content: str):
    """
    Build INSERT ... ON CONFLICT(id) DO UPDATE for a site_content row.

    Raises:
        ValueError: If the dialect has no ON CONFLICT support here
    """
    try:
        insert = _INSERT_BY_DIALECT[dialect_name]
    except KeyError:
        raise ValueError(f"Content upsert is not supported on {dialect_name}")

    now = utcnow()
    stmt = insert(SiteContent).values(id=page, content=content, updated_at=now)
    return stmt.on_conflict_do_update(
        index_elements=[SiteContent.id],
        set_={"content": content, "updated_at": now},
    )


@router.get("/{page}", response_model=ContentResponse)
async def get_content(page: str, db: AsyncSession = Depends(get_db)):
    """
    Get stored content for a page.

    A page that was never saved is not an error: the response carries
    null content and updatedAt so the client can use its built-in defaults.
    """
    result = await db.execute(select(SiteContent).where(SiteContent.id == page))
    row = result.scalar_one_or_none()

    if row is None:
        logger.debug(f"No stored content for page {page!r}")
        return ContentResponse(id=page)

    return ContentResponse(
        id=row.id,
        content=decode_content(row.content),
        updated_at=row.updated_at,
    )


@router.put("/{page}", response_model=SuccessResponse)
async def put_content(
    page: str,
    body: Any = Body(...),
    db: AsyncSession = Depends(get_db),
    admin: Optional[dict] = Depends(require_admin)
):
    """
    Replace the content document of a page, creating the row if needed.
    """
    content = encode_content(unwrap_content(body))
    dialect_name = db.get_bind().dialect.name

    await db.execute(build_upsert(dialect_name, page, content))
    await db.commit()

    logger.info(f"Saved content for page {page!r} ({len(content)} bytes)")

    return SuccessResponse()
