# tests/test_auth.py
import pytest

from pathwise.core.config import settings
from pathwise.services.auth import create_access_token, decode_access_token, hash_password, verify_password


def test_password_hash_roundtrip():
    hashed = hash_password("secret123")
    assert hashed.startswith("pbkdf2_sha256$")
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", "not-a-hash")


def test_password_hash_uses_configured_iterations(monkeypatch):
    old = hash_password("secret123")
    monkeypatch.setattr(settings, "PASSWORD_HASH_ITERATIONS", 1000)
    new = hash_password("secret123")
    assert new.split("$")[1] == "1000"
    # stored hashes keep verifying after the work factor changes
    assert verify_password("secret123", old)
    assert verify_password("secret123", new)
    assert not verify_password("secret123", new.replace("pbkdf2_sha256", "md5", 1))


def test_token_subject():
    assert decode_access_token(create_access_token(7)).sub == "7"


@pytest.mark.asyncio
async def test_register_login_and_session(client, store):
    r = await client.post("/api/auth/register", json={"username": "alice", "email": "alice@example.com", "password": "secret123"})
    assert r.status_code == 201
    data = r.json()
    assert data["username"] == "alice"
    assert "password" not in data
    assert data["accessToken"]

    # the session cookie from register authenticates the next call
    me = await client.get("/api/auth/user")
    assert me.status_code == 200
    assert me.json()["id"] == data["id"]

    r2 = await client.post("/api/auth/login", json={"username": "alice", "password": "secret123"})
    assert r2.status_code == 200
    assert r2.json()["email"] == "alice@example.com"
    assert store.get_user_by_username("alice").password != "secret123"


@pytest.mark.asyncio
async def test_duplicate_username_or_email_rejected(client, store, register_user):
    await register_user("alice")
    before = store.count("user")

    r = await client.post("/api/auth/register", json={"username": "alice", "email": "other@example.com", "password": "secret123"})
    assert r.status_code == 400
    r = await client.post("/api/auth/register", json={"username": "alice2", "email": "alice@example.com", "password": "secret123"})
    assert r.status_code == 400

    assert store.count("user") == before
    assert store.get_user_by_email("other@example.com") is None


@pytest.mark.asyncio
async def test_bad_credentials(client, register_user):
    await register_user("alice")
    r = await client.post("/api/auth/login", json={"username": "alice", "password": "nope-nope"})
    assert r.status_code == 401
    r = await client.post("/api/auth/login", json={"username": "ghost", "password": "secret123"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_unauthenticated_requests_get_401(client):
    assert (await client.get("/api/auth/user")).status_code == 401
    assert (await client.get("/api/skills")).status_code == 401
    r = await client.get("/api/careers", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_logout_clears_session(client, register_user):
    await register_user("alice")
    r = await client.post("/api/auth/logout")
    assert r.status_code == 200
    assert (await client.get("/api/auth/user")).status_code == 401


@pytest.mark.asyncio
async def test_bearer_token_wins_over_cookie(client, register_user, auth_headers):
    alice = await register_user("alice")
    await register_user("bob")  # cookie now belongs to bob
    r = await client.get("/api/auth/user", headers=auth_headers(alice))
    assert r.json()["username"] == "alice"


@pytest.mark.asyncio
async def test_dev_login_and_cookie_bypass(client, app):
    r = await client.post("/api/auth/dev-login")
    assert r.status_code == 200
    assert r.json()["username"] == "dev_user"
    assert r.json()["membership"] == "premium"

    me = await client.get("/api/auth/user")
    assert me.status_code == 200
    assert me.json()["id"] == app.state.dev_user_id


@pytest.mark.asyncio
async def test_dev_cookie_ignored_in_production(client, monkeypatch):
    monkeypatch.setattr(settings, "NODE_ENV", "production")
    dev_cookie = {"Cookie": f"{settings.DEV_COOKIE_NAME}=true"}
    assert (await client.get("/api/auth/user", headers=dev_cookie)).status_code == 401
    assert (await client.post("/api/auth/dev-login")).status_code == 404


@pytest.mark.asyncio
async def test_profile_get_and_patch(client, register_user):
    await register_user("alice")
    r = await client.patch("/api/user", json={"fullName": "Alice A", "skills": ["Python"], "targetCareer": "Data Scientist"})
    assert r.status_code == 200
    body = r.json()
    assert body["fullName"] == "Alice A"
    assert body["skills"] == ["Python"]
    assert "password" not in body

    r = await client.get("/api/user")
    assert r.json()["targetCareer"] == "Data Scientist"
    assert r.json()["membership"] == "free"


@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/health")
    assert r.json() == {"status": "ok"}
