"""
ImgBB service for forwarding image uploads.
The gallery stores only the URLs ImgBB returns; images never touch our disk.
"""
import httpx
from starlette.datastructures import FormData, UploadFile
from gallery_api.config import settings
import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class ImgBBUploadError(Exception):
    """Raised when ImgBB answers but rejects the upload."""


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """
    FastAPI dependency yielding an outbound HTTP client.
    One client per request; tests override this with a mock transport.
    """
    async with httpx.AsyncClient(timeout=settings.IMGBB_TIMEOUT_SECONDS) as client:
        yield client


async def split_form(form: FormData) -> Tuple[Dict[str, List[str]], List[Tuple[str, Tuple[str, bytes, str]]]]:
    """
    Split a parsed form into plain fields and file parts for httpx.

    Args:
        form: Parsed multipart or urlencoded form

    Returns:
        (data, files) ready for httpx.AsyncClient.post; repeated field
        names keep all their values
    """
    data: Dict[str, List[str]] = {}
    files = []
    for name, value in form.multi_items():
        if isinstance(value, UploadFile):
            content = await value.read()
            files.append((
                name,
                (value.filename or "upload", content, value.content_type or "application/octet-stream")
            ))
        else:
            data.setdefault(name, []).append(value)
    return data, files


async def forward_upload(
    client: httpx.AsyncClient,
    form: FormData,
    api_key: Optional[str] = None
) -> httpx.Response:
    """
    Forward an upload form to ImgBB unchanged.

    If the caller's form has no "key" field the configured key is added.

    Args:
        client: Outbound HTTP client
        form: Form received from the browser (image plus optional key)
        api_key: Key to inject; defaults to IMGBB_API_KEY

    Returns:
        httpx.Response: ImgBB's response, relayed by the caller
    """
    data, files = await split_form(form)

    key = api_key if api_key is not None else settings.IMGBB_API_KEY
    if key and "key" not in data:
        data["key"] = [key]

    logger.info(
        f"Forwarding upload to ImgBB: fields={sorted(name for name in data if name != 'key')}, "
        f"files={[name for name, _ in files]}"
    )

    response = await client.post(
        settings.IMGBB_API_URL,
        data=data,
        files=files or None,
    )

    logger.info(f"ImgBB responded with status {response.status_code}")
    return response


async def upload_base64(
    client: httpx.AsyncClient,
    image_base64: str,
    api_key: str
) -> Dict[str, Any]:
    """
    Upload a base64 encoded image to ImgBB.

    Args:
        client: Outbound HTTP client
        image_base64: Image bytes as base64 (without data URL prefix)
        api_key: ImgBB API key

    Returns:
        dict: Upload result containing:
            - url: Direct image URL
            - thumbnail: Thumbnail URL (thumb, then medium, then the image itself)
            - delete_url: ImgBB delete page URL

    Raises:
        ImgBBUploadError: If ImgBB rejects the upload
        httpx.HTTPError: For transport failures
    """
    response = await client.post(
        settings.IMGBB_API_URL,
        data={"image": image_base64, "key": api_key},
    )

    if response.status_code >= 400:
        logger.error(f"ImgBB API error ({response.status_code}): {response.text}")
        raise ImgBBUploadError("Failed to upload image to ImgBB")

    result = response.json()

    if not result.get("success"):
        message = (result.get("error") or {}).get("message") or "Failed to upload image"
        logger.error(f"ImgBB rejected upload: {message}")
        raise ImgBBUploadError(message)

    image = result["data"]
    thumbnail = (
        (image.get("thumb") or {}).get("url")
        or (image.get("medium") or {}).get("url")
        or image["url"]
    )

    logger.info(f"Successfully uploaded image: {image['url']}")

    return {
        "url": image["url"],
        "thumbnail": thumbnail,
        "delete_url": image.get("delete_url"),
    }


def validate_imgbb_config() -> bool:
    """
    Validate that the proxy can inject an ImgBB key.

    Returns:
        bool: True if a key is configured, False otherwise
    """
    if not settings.IMGBB_API_URL:
        logger.warning("IMGBB_API_URL not configured")
        return False
    if not settings.IMGBB_API_KEY:
        logger.warning("IMGBB_API_KEY not configured; callers must send their own key")
        return False

    logger.info("ImgBB configuration validated successfully")
    return True
