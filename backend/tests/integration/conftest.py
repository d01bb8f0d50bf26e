"""Fixtures for HTTP-level tests against the real app and a SQLite file."""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.main import app, lifespan

ADMIN_EMAIL = "admin@payplanner.test"
ADMIN_PASSWORD = "Admin123!"


@pytest_asyncio.fixture
async def client():
    # ASGITransport does not send lifespan events, so run startup here.
    async with lifespan(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as http:
            yield http


@pytest_asyncio.fixture
async def admin_headers(client: AsyncClient) -> dict[str, str]:
    response = await client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
