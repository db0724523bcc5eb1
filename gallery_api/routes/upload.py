"""
Upload proxy routes.
Browsers cannot call ImgBB directly from the gallery origin, so uploads are
relayed through here.
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import Optional
import httpx
import logging

from gallery_api.config import settings
from gallery_api.schemas import Base64UploadRequest, Base64UploadResponse
from gallery_api.services.imgbb_service import (
    ImgBBUploadError,
    forward_upload,
    get_http_client,
    upload_base64,
)
from gallery_api.utils.jwt_auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])


@router.post("/base64", response_model=Base64UploadResponse)
async def proxy_upload_base64(
    payload: Base64UploadRequest,
    client: httpx.AsyncClient = Depends(get_http_client),
    admin: Optional[dict] = Depends(require_admin)
):
    """
    Upload a base64 encoded image and return its hosted URLs.

    Raises:
        HTTPException: 400 if image data or API key is missing,
            500 if ImgBB rejects the upload or cannot be reached
    """
    if not payload.image_base64:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Image data is required"
        )

    api_key = payload.api_key or settings.IMGBB_API_KEY
    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="API key is required"
        )

    try:
        result = await upload_base64(client, payload.image_base64, api_key)
    except ImgBBUploadError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
    except httpx.HTTPError as e:
        logger.error(f"Base64 upload failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred during upload"
        )

    return Base64UploadResponse(**result)


@router.post("/{path:path}")
async def proxy_upload(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client)
):
    """
    Relay a multipart upload form to ImgBB.

    Any path other than /base64 is accepted. ImgBB's status code and JSON body are returned verbatim, including its
    own error responses.

    Returns:
        JSONResponse: ImgBB's answer, or 500 {"error": "Upload failed"} if
            ImgBB could not be reached or did not answer with JSON
    """
    try:
        form = await request.form(max_part_size=settings.UPLOAD_MAX_PART_BYTES)
        response = await forward_upload(client, form)
        return JSONResponse(status_code=response.status_code, content=response.json())

    except Exception as e:
        logger.error(f"Upload relay failed: {str(e)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Upload failed", "message": str(e)}
        )
