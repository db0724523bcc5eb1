"""Test configuration and fixtures for the gallery API.

Every test gets a fresh in-memory SQLite schema; the apps are driven
in-process through httpx's ASGI transport.
"""
import os

# Set test environment BEFORE importing app modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENFORCE_ADMIN_AUTH"] = "false"
os.environ["ADMIN_EMAILS"] = ""
os.environ["IMGBB_API_KEY"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import func, select

from gallery_api.database import AsyncSessionLocal, Base, engine
from gallery_api.main import app
from gallery_api.models import Photo, generate_id


@pytest_asyncio.fixture(scope="function")
async def db_tables() -> AsyncGenerator[None, None]:
    """Create all tables before the test and drop them afterwards."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Release the shared connection so the next test opens it on its own loop
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_tables) -> AsyncGenerator[AsyncClient, None]:
    """Async client for the metadata API."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def bare_client() -> AsyncGenerator[AsyncClient, None]:
    """Async client against a database without tables."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await engine.dispose()


@pytest.fixture
def insert_photo(db_tables):
    """Insert a photo row directly, bypassing the API (e.g. to pin created_at)."""
    async def _insert(**fields) -> str:
        fields.setdefault("id", generate_id())
        async with AsyncSessionLocal() as session:
            session.add(Photo(**fields))
            await session.commit()
        return fields["id"]
    return _insert


@pytest.fixture
def fetch_row(db_tables):
    """Load one row by primary key in a short-lived session."""
    async def _fetch(model, row_id):
        async with AsyncSessionLocal() as session:
            return await session.get(model, row_id)
    return _fetch


@pytest.fixture
def count_rows(db_tables):
    async def _count(model) -> int:
        async with AsyncSessionLocal() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()
    return _count


@pytest_asyncio.fixture(scope="function")
async def album_id(client: AsyncClient) -> str:
    """An album created through the API."""
    response = await client.post("/albums", json={"name": "Trips"})
    assert response.status_code == 201
    return response.json()["id"]