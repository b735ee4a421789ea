# pathwise/api/v1/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from pathwise.api.deps import SessionUser, get_current_user, get_store
from pathwise.api.v1.schemas import AuthOut, LoginIn, RegisterIn, UserSummary
from pathwise.core.config import settings
from pathwise.models.entities import User
from pathwise.repositories.memory import MemStore
from pathwise.services.auth import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def _auth_out(user: User, response: Response) -> AuthOut:
    token = create_access_token(user.id)
    _set_session_cookie(response, token)
    return AuthOut(
        id=user.id, username=user.username, email=user.email,
        full_name=user.full_name, membership=user.membership, access_token=token,
    )


@router.post("/register", response_model=AuthOut, status_code=201)
async def register(payload: RegisterIn, response: Response, store: MemStore = Depends(get_store)):
    if store.get_user_by_username(payload.username):
        raise HTTPException(status_code=400, detail="Username already exists")
    if store.get_user_by_email(payload.email):
        raise HTTPException(status_code=400, detail="Email already exists")
    user = store.create_user({
        "username": payload.username,
        "email": payload.email,
        "password": hash_password(payload.password),
        "full_name": payload.full_name,
    })
    logger.info("Registered user %s (id %s)", user.username, user.id)
    return _auth_out(user, response)


@router.post("/login", response_model=AuthOut)
async def login(payload: LoginIn, response: Response, store: MemStore = Depends(get_store)):
    user = store.get_user_by_username(payload.username)
    if not user or not verify_password(payload.password, user.password):
        logger.info("Failed login for %s", payload.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return _auth_out(user, response)


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    response.delete_cookie(settings.DEV_COOKIE_NAME)
    return {"success": True}


@router.post("/dev-login", response_model=UserSummary)
async def dev_login(request: Request, response: Response, store: MemStore = Depends(get_store)):
    if not settings.is_dev_mode():
        raise HTTPException(status_code=404, detail="Not found")
    dev_id = getattr(request.app.state, "dev_user_id", None)
    user = store.get_user(dev_id) if dev_id is not None else None
    if user is None:
        raise HTTPException(status_code=404, detail="Dev user not available")
    response.set_cookie(settings.DEV_COOKIE_NAME, "true", httponly=False, samesite="lax")
    return UserSummary(
        id=user.id, username=user.username, email=user.email,
        full_name=user.full_name, membership=user.membership,
    )


@router.get("/user", response_model=UserSummary)
async def current_user(user: SessionUser = Depends(get_current_user), store: MemStore = Depends(get_store)):
    record = store.get_user(user.id)
    return UserSummary(
        id=user.id, username=user.username, email=user.email,
        full_name=record.full_name if record else None, membership=user.membership,
    )
