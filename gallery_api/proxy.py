"""
Upload proxy application entry point.
Runs separately from the metadata API (uvicorn gallery_api.proxy:app) because
it answers CORS with an origin allow-list instead of "*".
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Dict, Optional
import logging

from gallery_api.config import settings
from gallery_api.routes import upload
from gallery_api.utils.errors import validation_error_details

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=f"{settings.API_TITLE} - Upload Proxy",
    description="Relays gallery image uploads to ImgBB",
    version=settings.API_VERSION,
)


def resolve_allowed_origin(origin: Optional[str]) -> str:
    """
    Pick the Access-Control-Allow-Origin value for a request.

    Allow-listed origins and any localhost origin are echoed back; every
    other origin (or none) gets the first allow-listed origin, which the
    browser will then refuse.
    """
    allowed = settings.UPLOAD_ALLOWED_ORIGINS
    if origin and (origin in allowed or "localhost" in origin):
        return origin
    return allowed[0] if allowed else ""


def cors_headers(origin: Optional[str]) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": resolve_allowed_origin(origin),
        "Access-Control-Allow-Methods": "POST, OPTIONS",
    }


def preflight_headers(origin: Optional[str]) -> Dict[str, str]:
    headers = cors_headers(origin)
    headers.update({
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Max-Age": "86400",
    })
    return headers


@app.middleware("http")
async def upload_cors(request: Request, call_next):
    """Answer preflights and stamp CORS headers on every other response."""
    origin = request.headers.get("origin")

    if request.method == "OPTIONS":
        logger.info(f"OPTIONS preflight to {request.url.path} from origin: {origin or 'No origin header'}")
        return Response(status_code=status.HTTP_204_NO_CONTENT, headers=preflight_headers(origin))

    response = await call_next(request)
    response.headers.update(cors_headers(origin))
    logger.info(f"Response status: {response.status_code} for {request.method} {request.url.path}")
    return response


app.include_router(upload.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render routing and handler errors as {"error": ...}."""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        content = {"error": "Method not allowed"}
    elif isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail}

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    logger.error(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation error", "detail": validation_error_details(exc)}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected exceptions.
    This runs outside the CORS middleware, so the headers are added here.
    """
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Upload failed", "message": str(exc)},
        headers=cors_headers(request.headers.get("origin"))
    )
