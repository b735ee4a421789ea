# pathwise/api/v1/skills.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from pathwise.api.deps import SessionUser, get_current_user, get_store, owned
from pathwise.api.v1.schemas import SkillCreate, SkillGapIn, SkillGapOut, SkillUpdate
from pathwise.models.entities import Skill
from pathwise.repositories.memory import MemStore
from pathwise.services import advisor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/skills", tags=["skills"])


@router.get("", response_model=List[Skill])
async def list_skills(
    category: Optional[str] = None,
    user: SessionUser = Depends(get_current_user),
    store: MemStore = Depends(get_store),
):
    if category:
        return store.list_skills_by_category(user.id, category)
    return store.list_skills_by_user(user.id)


@router.post("", response_model=Skill, status_code=201)
async def create_skill(payload: SkillCreate, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    return store.create_skill({**payload.model_dump(), "user_id": user.id})


@router.patch("/{skill_id}", response_model=Skill)
async def update_skill(
    skill_id: int,
    payload: SkillUpdate,
    user: SessionUser = Depends(get_current_user),
    store: MemStore = Depends(get_store),
):
    owned(store.get_skill(skill_id), user, "Skill")
    return store.update_skill(skill_id, payload.model_dump(exclude_unset=True))


@router.delete("/{skill_id}")
async def delete_skill(skill_id: int, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    owned(store.get_skill(skill_id), user, "Skill")
    store.delete_skill(skill_id)
    return {"success": True}


@router.post("/analyze-gap", response_model=SkillGapOut)
async def analyze_gap(payload: SkillGapIn, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    # the provider call happens before any write; a failure leaves the store untouched
    analysis = await advisor.analyze_skill_gap(payload.current_skills, payload.target_career)

    with store.batch() as batch:
        # every missing skill gets its own row, even if the user already has one by that name
        for missing in analysis.missing_skills:
            batch.create_skill({
                "user_id": user.id,
                "skill_name": missing.name,
                "category": missing.category,
                "is_missing": True,
            })
        for course in analysis.recommended_courses:
            wanted = course.skill_name.lower()
            skill = next((s for s in batch.skills_for_user(user.id) if s.skill_name.lower() == wanted), None)
            if skill is None:
                skill = batch.create_skill({
                    "user_id": user.id,
                    "skill_name": course.skill_name,
                    "category": course.category or "Unknown",
                    "is_missing": True,
                })
            batch.create_learning_path({
                "user_id": user.id,
                "skill_id": skill.id,
                "course_title": course.title,
                "platform": course.platform,
                "cost": course.cost,
                "duration": course.duration,
                "url": course.url,
                "status": "not_started",
            })

    learning_paths = batch.staged("learning_path")
    skills = batch.staged("skill")
    logger.info(
        "Skill gap for user %s (%s): %d skills, %d learning paths",
        user.id, payload.target_career, len(skills), len(learning_paths),
    )
    return SkillGapOut(analysis=analysis, learning_paths=learning_paths, skills=skills)
