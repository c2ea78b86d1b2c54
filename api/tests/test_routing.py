"""Routing, error mapping and security header tests."""

from httpx import ASGITransport, AsyncClient

from magnet_rss.dependencies import get_store
from magnet_rss.main import app


async def test_unknown_path(client):
    response = await client.get("/unknown")
    assert response.status_code == 404
    assert response.text == "Not Found"


async def test_post_rss_not_routed(client):
    response = await client.post("/rss")
    assert response.status_code == 404
    assert response.text == "Not Found"


async def test_get_update_not_routed(client):
    response = await client.get("/update")
    assert response.status_code == 404


async def test_post_health_not_routed(client):
    response = await client.post("/health")
    assert response.status_code == 404


async def test_security_headers(client):
    response = await client.get("/health")
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["cache-control"] == "no-store"
    assert "default-src 'none'" in response.headers["content-security-policy"]


async def test_unhandled_error_is_generic_500():
    def broken_store():
        raise RuntimeError("secret internal detail")

    app.dependency_overrides[get_store] = broken_store
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as ac:
            response = await ac.get("/rss")
        assert response.status_code == 500
        assert "secret internal detail" not in response.text
    finally:
        app.dependency_overrides.clear()
