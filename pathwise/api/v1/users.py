# pathwise/api/v1/users.py
from fastapi import APIRouter, Depends, HTTPException

from pathwise.api.deps import SessionUser, get_current_user, get_store
from pathwise.api.v1.schemas import UserOut, UserUpdate
from pathwise.repositories.memory import MemStore

router = APIRouter(prefix="/user", tags=["user"])


@router.get("", response_model=UserOut)
async def get_profile(user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    record = store.get_user(user.id)
    if record is None:
        raise HTTPException(status_code=404, detail="User not found")
    return record


@router.patch("", response_model=UserOut)
async def update_profile(
    payload: UserUpdate,
    user: SessionUser = Depends(get_current_user),
    store: MemStore = Depends(get_store),
):
    # membership, credentials and ids are not user-writable here
    updated = store.update_user(user.id, payload.model_dump(exclude_unset=True))
    if updated is None:
        raise HTTPException(status_code=404, detail="User not found")
    return updated
