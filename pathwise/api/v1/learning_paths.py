# pathwise/api/v1/learning_paths.py
from typing import List

from fastapi import APIRouter, Depends

from pathwise.api.deps import SessionUser, get_current_user, get_store, owned
from pathwise.api.v1.schemas import LearningPathCreate, LearningPathUpdate
from pathwise.models.entities import LearningPath
from pathwise.repositories.memory import MemStore

router = APIRouter(prefix="/learning-paths", tags=["learning-paths"])


@router.get("", response_model=List[LearningPath])
async def list_learning_paths(user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    return store.list_learning_paths_by_user(user.id)


@router.post("", response_model=LearningPath, status_code=201)
async def create_learning_path(
    payload: LearningPathCreate,
    user: SessionUser = Depends(get_current_user),
    store: MemStore = Depends(get_store),
):
    # a path may only hang off one of the caller's own skills
    owned(store.get_skill(payload.skill_id), user, "Skill")
    return store.create_learning_path({**payload.model_dump(), "user_id": user.id})


@router.get("/{path_id}", response_model=LearningPath)
async def get_learning_path(path_id: int, user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    return owned(store.get_learning_path(path_id), user, "Learning path")


@router.patch("/{path_id}", response_model=LearningPath)
async def update_learning_path(
    path_id: int,
    payload: LearningPathUpdate,
    user: SessionUser = Depends(get_current_user),
    store: MemStore = Depends(get_store),
):
    owned(store.get_learning_path(path_id), user, "Learning path")
    return store.update_learning_path(path_id, {"status": payload.status})
