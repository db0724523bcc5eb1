"""
Database connection and session management for SQLAlchemy 2.0.
Configured for async operations against SQLite (aiosqlite) or PostgreSQL (asyncpg).
"""
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy import text
from sqlalchemy.pool import StaticPool
from urllib.parse import urlparse
import logging

from gallery_api.config import settings

logger = logging.getLogger(__name__)

# Create declarative base for models
Base = declarative_base()


def async_database_url(url: str) -> str:
    """Point plain postgres URLs at the asyncpg driver."""
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return "postgresql+asyncpg://" + url[len("postgresql://"):]
    return url


DATABASE_URL = async_database_url(settings.DATABASE_URL)

_engine_args = {
    "echo": False,  # Set to True for SQL query logging in development
}

# Pool settings only apply to PostgreSQL (not SQLite)
if DATABASE_URL.startswith("postgresql"):
    _engine_args.update({
        "pool_size": 5,
        "max_overflow": 10,
        "pool_pre_ping": True,  # Verify connections before using (handles stale connections)
        "pool_recycle": 3600,
        "connect_args": {
            "server_settings": {
                "application_name": "photo-gallery-api"
            }
        }
    })
elif DATABASE_URL.startswith("sqlite") and ":memory:" in DATABASE_URL:
    # One shared connection, otherwise every checkout sees an empty database
    _engine_args["poolclass"] = StaticPool

engine = create_async_engine(DATABASE_URL, **_engine_args)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncSession:
    """
    FastAPI dependency for database sessions.
    Provides async database session with automatic commit/rollback.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(db: AsyncSession = Depends(get_db)):
            # Use db session here
            pass
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Database session error: {str(e)}", exc_info=True)
            raise
        finally:
            await session.close()


def _validate_database_url(url: str) -> tuple[bool, str]:
    """
    Validate database URL and provide diagnostic information.
    Returns (is_valid, diagnostic_message)
    """
    if not url:
        return False, "DATABASE_URL is empty"

    try:
        parsed = urlparse(url)
    except ValueError as e:
        return False, f"Error parsing DATABASE_URL: {str(e)}"

    if url.startswith("sqlite+aiosqlite://"):
        location = parsed.path.lstrip("/") or ":memory:"
        return True, f"SQLite database: {location}"

    if url.startswith("postgresql+asyncpg://"):
        if not parsed.hostname:
            return False, "No hostname found in DATABASE_URL"
        return True, (
            f"PostgreSQL database. Hostname: {parsed.hostname}, "
            f"Port: {parsed.port or 5432}, Database: {parsed.path or '/postgres'}"
        )

    return False, (
        "Unsupported database URL scheme. Expected sqlite+aiosqlite:// or "
        f"postgresql+asyncpg://, got: {parsed.scheme}"
    )


async def init_db():
    """
    Verify the database connection and create missing tables.
    Used by the startup event.
    """
    is_valid, diagnostic = _validate_database_url(DATABASE_URL)
    if not is_valid:
        logger.error(f"Invalid DATABASE_URL: {diagnostic}")
        raise ValueError(f"Invalid DATABASE_URL: {diagnostic}")

    logger.info(f"Database URL validation: {diagnostic}")

    # Register the tables on Base.metadata
    from gallery_api import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
        if settings.AUTO_CREATE_TABLES:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables verified")
    logger.info("Database connection initialized successfully")


async def close_db():
    """
    Close database connections.
    Used by the shutdown event.
    """
    await engine.dispose()
    logger.info("Database connections closed")
