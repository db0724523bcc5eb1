"""
FastAPI application entry point.
Metadata API for photos, albums and page content, with CORS open to all origins.
"""
from fastapi import FastAPI, Request, status, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text
from datetime import datetime, timezone
import logging
import asyncio

from gallery_api.config import settings
from gallery_api.database import get_db, init_db, close_db
from gallery_api.schemas import HealthResponse
from gallery_api.services.imgbb_service import validate_imgbb_config
from gallery_api.routes import photos, albums, content
from gallery_api.utils.errors import error_body, validation_error_details

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

# Create FastAPI application instance
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
)

# The gallery is read from any origin; writes are gated separately (see jwt_auth)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,  # Must be False when using wildcard origin
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log incoming requests and answer OPTIONS requests.

    Every OPTIONS, preflight or not, gets an empty 200 with the permissive
    CORS headers, whatever Access-Control-Request-Headers it lists.
    """
    method = request.method
    path = request.url.path
    origin = request.headers.get("origin", "No origin header")

    if method == "OPTIONS":
        logger.info(
            f"OPTIONS request to {path}\n"
            f"  Origin: {origin}\n"
            f"  Access-Control-Request-Method: {request.headers.get('access-control-request-method', 'N/A')}"
        )
        return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)
    else:
        logger.debug(f"Incoming {method} request to {path} from origin: {origin}")

    try:
        response = await call_next(request)
        logger.info(f"Response status: {response.status_code} for {method} {path}")
        return response
    except Exception as e:
        logger.error(
            f"Error processing {method} {path}: {str(e)}\n"
            f"  Origin: {origin}\n"
            f"  Error type: {type(e).__name__}",
            exc_info=True
        )
        raise


app.include_router(photos.router, prefix=settings.API_PREFIX)
app.include_router(albums.router, prefix=settings.API_PREFIX)
app.include_router(content.router, prefix=settings.API_PREFIX)


def add_cors_headers(response: JSONResponse) -> JSONResponse:
    """
    Add CORS headers to error responses.
    Responses built by the outermost server-error middleware bypass
    CORSMiddleware, so they need the headers set explicitly.
    """
    response.headers.update(CORS_HEADERS)
    return response


# Exception Handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handle HTTP exceptions (400, 401, 403, 404, ...) with CORS headers.
    A known path requested with an unhandled method is reported as 404,
    the same as an unknown path.
    """
    log = logger.warning if exc.status_code < 500 else logger.error
    log(
        f"HTTPException on {request.method} {request.url.path}: "
        f"status={exc.status_code}, detail={exc.detail}"
    )

    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        response = JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=error_body("Not Found")
        )
        return add_cors_headers(response)

    response = JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.detail),
        headers=getattr(exc, "headers", None)
    )
    return add_cors_headers(response)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
):
    """Handle request validation errors as client errors."""
    logger.warning(
        f"Validation error on {request.method} {request.url.path}:\n"
        f"  Errors: {exc.errors()}"
    )
    response = JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation error",
            "detail": validation_error_details(exc)
        }
    )
    return add_cors_headers(response)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle general exceptions.
    Store failures and bugs both surface as 500 with the exception message.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}:\n"
        f"  Error: {str(exc)}\n"
        f"  Error type: {type(exc).__name__}",
        exc_info=True
    )
    response = JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc) or "Internal Server Error"}
    )
    return add_cors_headers(response)


# Root Endpoints
@app.get("/")
async def root():
    """Root endpoint - API banner."""
    return {
        "message": settings.API_TITLE,
        "status": "healthy",
        "version": settings.API_VERSION
    }


@app.api_route(
    "/health",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"],
    response_model=HealthResponse
)
async def health_check():
    """Health check endpoint. Answers any method."""
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc).isoformat())


@app.get("/health/db")
async def health_check_db(db: AsyncSession = Depends(get_db)):
    """
    Database health check endpoint.
    Tests database connection and returns status.
    """
    try:
        result = await db.execute(text("SELECT 1"))
        return {
            "database": "connected",
            "status": "healthy",
            "result": result.scalar()
        }
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}", exc_info=True)
        return {
            "database": "error",
            "status": "unhealthy",
            "error": "Database connection failed"
        }


@app.get("/health/imgbb")
async def health_check_imgbb():
    """
    ImgBB configuration check.
    Reports whether the upload proxy can inject an API key.
    """
    if validate_imgbb_config():
        return {
            "imgbb": "configured",
            "status": "healthy",
            "api_url": settings.IMGBB_API_URL
        }
    return {
        "imgbb": "not_configured",
        "status": "warning",
        "message": "IMGBB_API_KEY not set; uploads must supply their own key"
    }


@app.on_event("startup")
async def startup_event():
    """
    Initialize database connection on application startup.
    Non-blocking: app will start even if database connection fails.
    """
    try:
        await init_db()
        logger.info("Database connection established successfully")
    except Exception as e:
        logger.error(
            f"Failed to initialize database on startup: {str(e)}\n"
            f"The application will continue to run, but database-dependent endpoints will fail.\n"
            f"Please check your DATABASE_URL configuration."
        )


@app.on_event("shutdown")
async def shutdown_event():
    """Close database connections on application shutdown."""
    try:
        await close_db()
    except asyncio.CancelledError:
        # Cancellation during shutdown is expected
        pass
    except Exception as e:
        logger.warning(f"Error during database shutdown: {str(e)}")
