# tests/conftest.py
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from pathwise.main import create_app


@pytest.fixture
def app():
    """A fresh app, and so a fresh in-memory store, for every test."""
    return create_app()


@pytest.fixture
def store(app):
    return app.state.store


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def register_user(client):
    """Register a user; the client keeps that user's session cookie."""
    async def _register(username="alice", password="secret123", email=None):
        r = await client.post(
            "/api/auth/register",
            json={"username": username, "email": email or f"{username}@example.com", "password": password},
        )
        assert r.status_code == 201, r.text
        return r.json()

    return _register


def bearer(auth: dict) -> dict:
    return {"Authorization": f"Bearer {auth['accessToken']}"}


@pytest.fixture
def auth_headers():
    return bearer
