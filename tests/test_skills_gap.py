# tests/test_skills_gap.py
import pytest

from pathwise.core.errors import UpstreamServiceError
from pathwise.services import llm_adapter


@pytest.mark.asyncio
async def test_analyze_gap_end_to_end(client, register_user):
    user = await register_user("alice")
    r = await client.post("/api/skills/analyze-gap", json={"currentSkills": ["Python"], "targetCareer": "Data Scientist"})
    assert r.status_code == 200
    body = r.json()

    missing = body["analysis"]["missingSkills"]
    assert isinstance(missing, list)
    assert "Python" not in [m["name"] for m in missing]
    assert isinstance(body["learningPaths"], list)

    skills = {s["id"]: s for s in (await client.get("/api/skills")).json()}
    for path in body["learningPaths"]:
        assert path["userId"] == user["id"]
        assert path["status"] == "not_started"
        assert skills[path["skillId"]]["userId"] == user["id"]
    assert all(s["isMissing"] for s in body["skills"])


@pytest.mark.asyncio
async def test_course_reuses_existing_skill_case_insensitively(client, register_user):
    await register_user("alice")
    existing = (await client.post("/api/skills", json={"skillName": "sql", "category": "Data"})).json()

    r = await client.post("/api/skills/analyze-gap", json={"currentSkills": ["Python"], "targetCareer": "Data Scientist"})
    body = r.json()
    sql_path = next(p for p in body["learningPaths"] if "SQL" in p["courseTitle"])
    assert sql_path["skillId"] == existing["id"]

    # missing skills are still recorded even when a same-named row exists
    names = [s["skillName"] for s in (await client.get("/api/skills")).json()]
    assert names.count("sql") == 1
    assert names.count("SQL") == 1


@pytest.mark.asyncio
async def test_course_without_matching_skill_creates_one(client, register_user, monkeypatch):
    await register_user("alice")

    async def text_only(task, payload):
        return "Recommended Courses:\n- Intro to Kubernetes - Udemy - $10 - 3 hours"

    monkeypatch.setattr(llm_adapter, "complete", text_only)
    r = await client.post("/api/skills/analyze-gap", json={"currentSkills": [], "targetCareer": "DevOps Engineer"})
    assert r.status_code == 200
    body = r.json()
    assert body["analysis"]["missingSkills"] == []
    assert len(body["skills"]) == 1
    created = body["skills"][0]
    assert created["skillName"] == "Intro to Kubernetes"
    assert created["category"] == "Unknown"
    assert body["learningPaths"][0]["skillId"] == created["id"]
    assert body["learningPaths"][0]["platform"] == "Udemy"


@pytest.mark.asyncio
async def test_provider_failure_persists_nothing(client, store, register_user, monkeypatch):
    await register_user("alice")

    async def boom(task, payload):
        raise UpstreamServiceError("llm", "provider down")

    monkeypatch.setattr(llm_adapter, "complete", boom)
    r = await client.post("/api/skills/analyze-gap", json={"currentSkills": ["Python"], "targetCareer": "Data Scientist"})
    assert r.status_code == 500
    assert "provider down" not in r.text
    assert store.count("skill") == 0
    assert store.count("learning_path") == 0


@pytest.mark.asyncio
async def test_short_target_career_rejected(client, store, register_user):
    await register_user("alice")
    r = await client.post("/api/skills/analyze-gap", json={"currentSkills": ["Python"], "targetCareer": "D"})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "targetCareer"
    assert store.count("skill") == 0


@pytest.mark.asyncio
async def test_skill_crud_is_ownership_scoped(client, register_user, auth_headers):
    alice = await register_user("alice")
    bob = await register_user("bob")

    r = await client.post("/api/skills", json={"skillName": "Go", "category": "Programming", "userId": 999}, headers=auth_headers(alice))
    assert r.status_code == 201
    skill = r.json()
    assert skill["userId"] == alice["id"]

    assert (await client.patch(f"/api/skills/{skill['id']}", json={"proficiency": 3}, headers=auth_headers(bob))).status_code == 403
    assert (await client.delete(f"/api/skills/{skill['id']}", headers=auth_headers(bob))).status_code == 403
    assert (await client.patch("/api/skills/999", json={"proficiency": 3}, headers=auth_headers(alice))).status_code == 404

    r = await client.patch(f"/api/skills/{skill['id']}", json={"proficiency": 80}, headers=auth_headers(alice))
    assert r.json()["proficiency"] == 80
    assert r.json()["skillName"] == "Go"

    r = await client.get("/api/skills?category=Programming", headers=auth_headers(alice))
    assert [s["id"] for s in r.json()] == [skill["id"]]
    assert (await client.get("/api/skills", headers=auth_headers(bob))).json() == []

    assert (await client.delete(f"/api/skills/{skill['id']}", headers=auth_headers(alice))).json() == {"success": True}
    assert (await client.delete(f"/api/skills/{skill['id']}", headers=auth_headers(alice))).status_code == 404
