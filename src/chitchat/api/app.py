"""
chitchat.api.app

FastAPI app factory for the Chit Chat backend.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chitchat import __version__
from chitchat.api.errors import register_error_handlers
from chitchat.api.routers.auth import router as auth_router
from chitchat.api.routers.chat import router as chat_router
from chitchat.api.routers.health import router as health_router
from chitchat.auth.passwords import PasswordHasher
from chitchat.db.init_db import init_db, seed_db
from chitchat.db.session import create_engine, create_sessionmaker
from chitchat.observability.logging import configure_logging, get_logger
from chitchat.observability.middleware import RequestContextMiddleware
from chitchat.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schema is managed by Alembic migrations.
            await init_db(engine)
        if settings.seed_default_room:
            await seed_db(engine, app.state.sessionmaker)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Chit Chat API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(chat_router, prefix=settings.api_prefix)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; request validation lives in routers and domain
# rules in `chitchat.services`.
