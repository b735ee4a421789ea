# tests/test_validation.py
import pytest


@pytest.mark.asyncio
async def test_register_field_errors(client, store):
    before = store.count("user")
    r = await client.post("/api/auth/register", json={"username": "ab", "email": "not-an-email", "password": "123"})
    assert r.status_code == 400
    body = r.json()
    assert body["detail"] == "Validation failed"
    assert {e["field"] for e in body["errors"]} == {"username", "email", "password"}
    assert store.count("user") == before


@pytest.mark.asyncio
async def test_missing_required_fields(client, register_user):
    await register_user("alice")
    r = await client.post("/api/careers/generate", json={"skills": ["Python"]})
    assert r.status_code == 400
    fields = {e["field"] for e in r.json()["errors"]}
    assert {"interests", "educationLevel", "experience"} <= fields


@pytest.mark.asyncio
async def test_wrong_types(client, register_user):
    await register_user("alice")
    r = await client.post("/api/skills", json={"skillName": "Go", "category": "Programming", "proficiency": "lots"})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "proficiency"


@pytest.mark.asyncio
async def test_business_idea_too_short(client, store, register_user):
    await register_user("alice")
    r = await client.post("/api/entrepreneurship/evaluate", json={"businessIdea": "cafe"})
    assert r.status_code == 400
    assert store.count("chat") == 0


@pytest.mark.asyncio
async def test_null_rejected_on_skill_patch(client, register_user):
    await register_user("alice")
    skill = (await client.post("/api/skills", json={"skillName": "Go", "category": "Programming", "proficiency": 40})).json()

    r = await client.patch(f"/api/skills/{skill['id']}", json={"skillName": None})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "skillName"
    assert (await client.get("/api/skills")).json()[0]["skillName"] == "Go"

    # proficiency is nullable, so clearing it is a normal update
    r = await client.patch(f"/api/skills/{skill['id']}", json={"proficiency": None})
    assert r.status_code == 200
    assert r.json()["proficiency"] is None


@pytest.mark.asyncio
async def test_null_rejected_on_job_patch(client, store, register_user):
    alice = await register_user("alice")
    job = store.create_job({"user_id": alice["id"], "job_title": "Data Analyst"})

    r = await client.patch(f"/api/jobs/{job.id}", json={"isSaved": None})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "isSaved"
    assert store.get_job(job.id).is_saved is False


@pytest.mark.asyncio
async def test_null_rejected_on_user_patch(client, store, register_user):
    alice = await register_user("alice")
    await client.patch("/api/user", json={"skills": ["Python"]})

    r = await client.patch("/api/user", json={"skills": None})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "skills"
    assert store.get_user(alice["id"]).skills == ["Python"]

    r = await client.patch("/api/user", json={"fullName": None})
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_null_rejected_on_resume_patch(client, store, register_user):
    await register_user("alice")
    resume = (await client.post("/api/resumes", json={"originalContent": "draft"})).json()

    r = await client.patch(f"/api/resumes/{resume['id']}", json={"status": None, "aiSuggestions": None})
    assert r.status_code == 400
    assert {e["field"] for e in r.json()["errors"]} == {"status", "aiSuggestions"}
    assert store.get_resume(resume["id"]).status == "pending"
