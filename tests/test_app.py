"""
Application-level tests: health checks, CORS handling and error bodies.
"""
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
class TestHealth:

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert "T" in body["timestamp"]

    async def test_root_banner(self, client: AsyncClient):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_health_db(self, client: AsyncClient):
        response = await client.get("/health/db")
        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    async def test_health_imgbb_without_key(self, client: AsyncClient):
        response = await client.get("/health/imgbb")
        assert response.status_code == 200
        assert response.json()["imgbb"] == "not_configured"


@pytest.mark.asyncio
class TestCors:

    async def test_preflight_allows_any_origin(self, client: AsyncClient):
        response = await client.options(
            "/photos",
            headers={
                "Origin": "https://somewhere.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            }
        )
        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]

    async def test_preflight_with_extra_request_header(self, client: AsyncClient):
        response = await client.options(
            "/photos/abc",
            headers={
                "Origin": "https://somewhere.example",
                "Access-Control-Request-Method": "PUT",
                "Access-Control-Request-Headers": "content-type, x-requested-with",
            }
        )
        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert "PUT" in response.headers["access-control-allow-methods"]

    async def test_bare_options_is_answered_empty(self, client: AsyncClient):
        response = await client.options("/anything/at/all")
        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"

    async def test_simple_request_carries_origin_header(self, client: AsyncClient):
        response = await client.get("/photos", headers={"Origin": "https://somewhere.example"})
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
class TestErrors:

    async def test_unknown_route_is_404(self, client: AsyncClient):
        response = await client.get("/nope")
        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.parametrize("method, path", [
        ("GET", "/photos/abc"),
        ("POST", "/albums/abc"),
        ("PATCH", "/photos"),
        ("POST", "/content/home/extra"),
    ])
    async def test_unhandled_method_is_404(self, client: AsyncClient, method, path):
        response = await client.request(method, path)
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "detail": "Not Found"}
        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
    async def test_health_answers_any_method(self, client: AsyncClient, method):
        response = await client.request(method, "/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    async def test_malformed_json_is_400(self, client: AsyncClient):
        response = await client.post(
            "/photos",
            content=b"{not json",
            headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Validation error"

    async def test_store_failure_is_500_with_message(self, bare_client: AsyncClient):
        response = await bare_client.get("/photos")
        assert response.status_code == 500
        assert "no such table" in response.json()["error"]
        assert response.headers["access-control-allow-origin"] == "*"
