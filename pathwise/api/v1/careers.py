# pathwise/api/v1/careers.py
import logging
from typing import List

from fastapi import APIRouter, Depends

from pathwise.api.deps import SessionUser, get_current_user, get_store, owned
from pathwise.api.v1.schemas import CareerGenerateIn
from pathwise.models.entities import Career
from pathwise.repositories.memory import MemStore
from pathwise.services import advisor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/careers", tags=["careers"])


@router.get("", response_model=List[Career])
async def list_careers(user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    return store.list_careers_by_user(user.id)


@router.get("/{career_id}", response_model=Career)
async def get_career(career_id: int, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    return owned(store.get_career(career_id), user, "Career")


@router.post("/generate", response_model=List[Career])
async def generate_careers(
    payload: CareerGenerateIn,
    user: SessionUser = Depends(get_current_user),
    store: MemStore = Depends(get_store),
):
    recommendations = await advisor.generate_career_recommendations(
        payload.skills, payload.interests, payload.education_level, payload.experience
    )
    with store.batch() as batch:
        for rec in recommendations:
            batch.create("career", {
                "user_id": user.id,
                "career_title": rec.title,
                "description": rec.description,
                "salary_range": rec.salary_range,
                "growth_rate": rec.growth_rate,
                "fit_score": rec.fit_score,
                "required_skills": rec.required_skills,
            })
    saved = batch.staged("career")
    logger.info("Saved %d career recommendations for user %s", len(saved), user.id)
    return saved
