# pathwise/main.py
import logging
import secrets

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pathwise.api.v1.auth import router as auth_router
from pathwise.api.v1.careers import router as careers_router
from pathwise.api.v1.chats import router as chats_router
from pathwise.api.v1.content import router as content_router
from pathwise.api.v1.entrepreneurship import router as entrepreneurship_router
from pathwise.api.v1.jobs import router as jobs_router
from pathwise.api.v1.learning_paths import router as learning_paths_router
from pathwise.api.v1.market_trends import router as market_trends_router
from pathwise.api.v1.resumes import router as resumes_router
from pathwise.api.v1.skills import router as skills_router
from pathwise.api.v1.users import router as users_router
from pathwise.core.config import settings
from pathwise.core.errors import register_exception_handlers
from pathwise.core.logging import configure_logging, install_request_logging
from pathwise.repositories.memory import MemStore
from pathwise.services.auth import hash_password

logger = logging.getLogger(__name__)

DEV_USER = {
    "username": "dev_user",
    "email": "dev@pathwise.local",
    "full_name": "Developer Account",
    "membership": "premium",
    "profile_complete": True,
}


def _seed_dev_user(store: MemStore) -> int:
    # nobody logs in as the dev user with a password
    user = store.create_user({**DEV_USER, "password": hash_password(secrets.token_urlsafe(16))})
    logger.warning("Dev mode is ON: dev-access cookie bypasses auth as %s (id %s)", user.username, user.id)
    return user.id


def create_app(store: MemStore = None) -> FastAPI:
    """Build an app with its own store. Tests call this once per test."""
    configure_logging(settings.LOG_LEVEL)
    app = FastAPI(title="PathWise API")

    app.state.store = store if store is not None else MemStore()
    app.state.dev_user_id = _seed_dev_user(app.state.store) if settings.is_dev_mode() else None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_request_logging(app)
    register_exception_handlers(app)

    for router in (
        auth_router,
        users_router,
        careers_router,
        skills_router,
        resumes_router,
        jobs_router,
        learning_paths_router,
        chats_router,
        entrepreneurship_router,
        market_trends_router,
        content_router,
    ):
        app.include_router(router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
