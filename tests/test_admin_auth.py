"""
Tests for the optional admin guard on mutating routes.
"""
from datetime import timedelta

import pytest
from httpx import AsyncClient
from jose import jwt

from gallery_api.config import settings
from gallery_api.utils.jwt_auth import ALGORITHM, create_admin_token

ADMIN = "owner@example.com"


@pytest.fixture
def enforce_admin(monkeypatch):
    monkeypatch.setattr(settings, "ENFORCE_ADMIN_AUTH", True)
    monkeypatch.setattr(settings, "ADMIN_EMAILS", f"{ADMIN}, second@example.com")


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
class TestAdminGuard:

    async def test_writes_are_open_when_not_enforced(self, client: AsyncClient):
        response = await client.post("/albums", json={"name": "Open"})
        assert response.status_code == 201

    async def test_missing_token(self, client: AsyncClient, enforce_admin):
        response = await client.post("/albums", json={"name": "Trips"})
        assert response.status_code == 401
        assert response.json() == {"error": "Missing token", "message": "Authentication required"}

    async def test_non_admin_subject(self, client: AsyncClient, enforce_admin):
        token = create_admin_token("stranger@example.com")
        response = await client.post("/albums", json={"name": "Trips"}, headers=bearer(token))
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"

    async def test_admin_token_is_accepted(self, client: AsyncClient, enforce_admin):
        token = create_admin_token("Owner@Example.com")
        response = await client.post("/albums", json={"name": "Trips"}, headers=bearer(token))
        assert response.status_code == 201

        album_id = response.json()["id"]
        response = await client.delete(f"/albums/{album_id}", headers=bearer(token))
        assert response.status_code == 200

    @pytest.mark.parametrize("token", [
        "not-a-jwt",
        create_admin_token(ADMIN, expires_delta=timedelta(minutes=-5)),
    ])
    async def test_invalid_or_expired_token(self, client: AsyncClient, enforce_admin, token):
        response = await client.put("/content/home", json={"content": {}}, headers=bearer(token))
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token"

    async def test_token_of_wrong_type(self, client: AsyncClient, enforce_admin):
        claims = jwt.get_unverified_claims(create_admin_token(ADMIN))
        claims["type"] = "refresh"
        token = jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=ALGORITHM)

        response = await client.post("/photos", json={"url": "http://x/1.jpg"}, headers=bearer(token))
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid token type"

    async def test_reads_need_no_token(self, client: AsyncClient, enforce_admin):
        assert (await client.get("/photos")).status_code == 200
        assert (await client.get("/albums")).status_code == 200
        assert (await client.get("/content/home")).status_code == 200
