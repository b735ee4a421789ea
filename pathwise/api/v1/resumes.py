# pathwise/api/v1/resumes.py
from typing import List

from fastapi import APIRouter, Depends

from pathwise.api.deps import SessionUser, get_current_user, get_store, owned
from pathwise.api.v1.schemas import ResumeCreate, ResumeOptimizeIn, ResumeUpdate
from pathwise.models.entities import Resume
from pathwise.repositories.memory import MemStore
from pathwise.services import advisor

router = APIRouter(prefix="/resumes", tags=["resumes"])


@router.get("", response_model=List[Resume])
async def list_resumes(user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    return store.list_resumes_by_user(user.id)


@router.post("", response_model=Resume, status_code=201)
async def create_resume(payload: ResumeCreate, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    return store.create_resume({**payload.model_dump(), "user_id": user.id})


@router.post("/optimize", response_model=Resume)
async def optimize_resume(
    payload: ResumeOptimizeIn,
    user: SessionUser = Depends(get_current_user),
    store: MemStore = Depends(get_store),
):
    result = await advisor.optimize_resume(payload.resume_content, payload.target_position)
    return store.create_resume({
        "user_id": user.id,
        "original_content": payload.resume_content,
        "optimized_content": result.optimized_content,
        "ai_suggestions": result.improvements,
        "status": "completed",
    })


@router.get("/{resume_id}", response_model=Resume)
async def get_resume(resume_id: int, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    return owned(store.get_resume(resume_id), user, "Resume")


@router.patch("/{resume_id}", response_model=Resume)
async def update_resume(
    resume_id: int,
    payload: ResumeUpdate,
    user: SessionUser = Depends(get_current_user),
    store: MemStore = Depends(get_store),
):
    owned(store.get_resume(resume_id), user, "Resume")
    return store.update_resume(resume_id, payload.model_dump(exclude_unset=True))
