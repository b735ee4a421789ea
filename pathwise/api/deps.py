# pathwise/api/deps.py
"""
Request-scoped dependencies shared by the v1 routers.

A caller is authenticated by, in order:
1. the dev-access cookie, when dev mode is on (resolves to the seeded dev user);
2. a bearer token in the Authorization header;
3. the session cookie set by login/register.
"""
import logging
from typing import Optional, TypeVar

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from pathwise.core.config import settings
from pathwise.models.entities import CamelModel, Membership, Record
from pathwise.repositories.memory import MemStore
from pathwise.services.auth import JWTError, decode_access_token

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)

R = TypeVar("R", bound=Record)


class SessionUser(CamelModel):
    id: int
    username: str
    email: str
    membership: Membership = "free"


def get_store(request: Request) -> MemStore:
    return request.app.state.store


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    store: MemStore = Depends(get_store),
) -> SessionUser:
    if settings.is_dev_mode() and request.cookies.get(settings.DEV_COOKIE_NAME) == "true":
        dev_id = getattr(request.app.state, "dev_user_id", None)
        dev_user = store.get_user(dev_id) if dev_id is not None else None
        if dev_user is not None:
            return SessionUser(
                id=dev_user.id, username=dev_user.username, email=dev_user.email, membership=dev_user.membership,
            )

    token = credentials.credentials if credentials else request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise _unauthorized()
    try:
        td = decode_access_token(token)
    except JWTError:
        raise _unauthorized()
    if not td.sub or not td.sub.isdigit():
        raise _unauthorized()
    user = store.get_user(int(td.sub))
    if user is None:
        raise _unauthorized()
    return SessionUser(id=user.id, username=user.username, email=user.email, membership=user.membership)


def owned(record: Optional[R], user: SessionUser, label: str) -> R:
    """404 if the record is missing, 403 if it belongs to someone else."""
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    if record.user_id != user.id:
        logger.warning("User %s denied access to %s %s", user.id, label, record.id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return record
