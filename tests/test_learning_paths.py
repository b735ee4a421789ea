# tests/test_learning_paths.py
import pytest


async def _skill(client, headers=None):
    r = await client.post("/api/skills", json={"skillName": "SQL", "category": "Data"}, headers=headers)
    return r.json()


@pytest.mark.asyncio
async def test_create_and_progress_learning_path(client, register_user):
    await register_user("alice")
    skill = await _skill(client)
    r = await client.post("/api/learning-paths", json={"skillId": skill["id"], "courseTitle": "SQL 101", "platform": "Coursera"})
    assert r.status_code == 201
    path = r.json()
    assert path["status"] == "not_started"

    r = await client.patch(f"/api/learning-paths/{path['id']}", json={"status": "in_progress"})
    assert r.status_code == 200
    assert r.json()["status"] == "in_progress"
    assert r.json()["courseTitle"] == "SQL 101"

    got = (await client.get(f"/api/learning-paths/{path['id']}")).json()
    assert got["status"] == "in_progress"
    assert [p["id"] for p in (await client.get("/api/learning-paths")).json()] == [path["id"]]


@pytest.mark.asyncio
async def test_invalid_status_rejected(client, register_user):
    await register_user("alice")
    skill = await _skill(client)
    path = (await client.post("/api/learning-paths", json={"skillId": skill["id"], "courseTitle": "SQL 101"})).json()
    r = await client.patch(f"/api/learning-paths/{path['id']}", json={"status": "done"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Validation failed"


@pytest.mark.asyncio
async def test_path_must_reference_own_skill(client, register_user, auth_headers):
    alice = await register_user("alice")
    alice_skill = await _skill(client, auth_headers(alice))
    bob = await register_user("bob")

    r = await client.post("/api/learning-paths", json={"skillId": alice_skill["id"], "courseTitle": "x"}, headers=auth_headers(bob))
    assert r.status_code == 403
    r = await client.post("/api/learning-paths", json={"skillId": 999, "courseTitle": "x"}, headers=auth_headers(bob))
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_other_users_path_is_forbidden(client, register_user, auth_headers):
    alice = await register_user("alice")
    skill = await _skill(client, auth_headers(alice))
    path = (await client.post("/api/learning-paths", json={"skillId": skill["id"], "courseTitle": "x"}, headers=auth_headers(alice))).json()
    bob = await register_user("bob")
    r = await client.patch(f"/api/learning-paths/{path['id']}", json={"status": "completed"}, headers=auth_headers(bob))
    assert r.status_code == 403
    assert (await client.get(f"/api/learning-paths/{path['id']}", headers=auth_headers(bob))).status_code == 403
