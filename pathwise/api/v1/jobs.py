# pathwise/api/v1/jobs.py
import logging
from typing import List

from fastapi import APIRouter, Depends

from pathwise.api.deps import SessionUser, get_current_user, get_store, owned
from pathwise.api.v1.schemas import JobMatchIn, JobUpdate
from pathwise.models.entities import Job
from pathwise.repositories.memory import MemStore
from pathwise.services import advisor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("", response_model=List[Job])
async def list_jobs(
    saved: bool = False,
    user: SessionUser = Depends(get_current_user),
    store: MemStore = Depends(get_store),
):
    if saved:
        return store.list_saved_jobs_by_user(user.id)
    return store.list_jobs_by_user(user.id)


@router.post("/match", response_model=List[Job])
async def match_jobs(payload: JobMatchIn, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    preferences = payload.preferences.model_dump(by_alias=True, exclude_none=True) if payload.preferences else None
    matches = await advisor.match_jobs(payload.user_skills, payload.user_experience, preferences)
    with store.batch() as batch:
        for m in matches:
            batch.create("job", {
                "user_id": user.id,
                "job_title": m.title,
                "company": m.company,
                "description": m.description,
                "match_percentage": m.match_percentage,
                "match_tier": m.match_tier,
                "salary": m.salary,
                "location": m.location,
                "url": m.url,
                "match_reasons": m.match_reasons,
                "required_skills": m.required_skills,
                "user_skill_match": m.user_skill_match,
                "skill_gaps": m.skill_gaps,
                "skill_match_count": m.skill_match_count or 0,
                "skill_gap_count": m.skill_gap_count or 0,
                "growth_potential": m.growth_potential,
                "industry_trends": m.industry_trends,
                "remote_type": m.remote_type,
                "application_status": m.application_status or "Not Applied",
                "development_plan": m.development_plan,
                "career_progression": m.career_progression,
                "is_saved": False,
            })
    saved = batch.staged("job")
    logger.info("Saved %d job matches for user %s", len(saved), user.id)
    return saved


@router.get("/{job_id}", response_model=Job)
async def get_job(job_id: int, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    return owned(store.get_job(job_id), user, "Job")


@router.patch("/{job_id}", response_model=Job)
async def update_job(
    job_id: int,
    payload: JobUpdate,
    user: SessionUser = Depends(get_current_user),
    store: MemStore = Depends(get_store),
):
    owned(store.get_job(job_id), user, "Job")
    return store.update_job(job_id, payload.model_dump(exclude_unset=True))
