"""
chitchat.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions and the password hasher.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from chitchat.auth.passwords import PasswordHasher
from chitchat.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The app factory stores the settings it was built with.
    return request.app.state.settings  # type: ignore[attr-defined]


def password_hasher_dep(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created in the lifespan handler of `chitchat.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commits are issued by the service layer.
    async with session_factory() as session:
        yield session
