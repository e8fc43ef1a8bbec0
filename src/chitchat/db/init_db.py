"""
chitchat.db.init_db

DB initialization helpers.

Responsibilities:
- Create tables for local development and tests.
- Seed the default "General" room once the schema exists.
"""

from __future__ import annotations

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from chitchat.db import models  # noqa: F401  # register models on Base.metadata
from chitchat.db.base import Base
from chitchat.db.models import Room
from chitchat.db.repositories.rooms import RoomRepo
from chitchat.observability.logging import get_logger

log = get_logger(__name__)


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    Production should rely on Alembic migrations.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_db(
    engine: AsyncEngine, session_factory: async_sessionmaker[AsyncSession]
) -> bool:
    """
    Insert the default room into an empty `rooms` table.

    Returns False without touching the database when the schema has not been
    migrated yet (prod before `alembic upgrade`).
    """

    async with engine.connect() as conn:
        has_rooms = await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).has_table(Room.__tablename__)
        )
    if not has_rooms:
        log.warning("seed_skipped", reason="schema_missing")
        return False

    async with session_factory() as session:
        await RoomRepo(session).ensure_default_room()
        await session.commit()
    return True
