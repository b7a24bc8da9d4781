"""Tests for health endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from postsearch.main import app


@pytest.fixture
async def client():
    """Create test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    """Test health endpoint returns ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


@pytest.mark.asyncio
async def test_openapi_lists_post_routes(client: AsyncClient):
    """Test that the posts router is mounted."""
    response = await client.get("/openapi.json")
    assert response.status_code == 200
    paths = response.json()["paths"]
    assert "/posts" in paths
    assert "/posts/{post_id}" in paths
    assert "/posts/{post_id}/edit" in paths
    assert "/posts-search" in paths
