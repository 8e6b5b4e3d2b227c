from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.router import api_router, root_router
from app.auth import build_token_verifier
from app.config import Settings, get_settings
from app.db.repository import UserRepository
from app.db.session import Database
from app.errors import register_error_handlers
from app.middleware import log_requests
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    logger.info("Shutting down, closing database pool")
    app.state.db.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="User Service API", version=VERSION, lifespan=lifespan)

    # Storage. Failing here (bad URL, unreachable server) aborts startup.
    app.state.db = Database.from_url(settings.DATABASE_URL, pool_size=settings.DB_POOL_SIZE)
    app.state.db.create_tables()

    # Layers are built once and shared by every request.
    repository = UserRepository(app.state.db.SessionLocal)
    app.state.user_service = UserService(repository)
    app.state.token_verifier = build_token_verifier(settings.AUTH_MODE, settings.JWT_SECRET)
    if app.state.token_verifier is None:
        logger.warning("AUTH_MODE=none: the user API is not protected")

    register_error_handlers(app)
    app.middleware("http")(log_requests)

    app.include_router(root_router)
    app.include_router(api_router, prefix="/api")

    return app
