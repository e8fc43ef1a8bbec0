"""
chitchat.db.repositories.rooms

Repository for `Room` entities.
"""

from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from chitchat.db.models import Room

DEFAULT_ROOM_NAME = "General"
DEFAULT_ROOM_DESCRIPTION = "General chat room"


class RoomRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_all(self) -> list[Room]:
        stmt = select(Room).order_by(Room.created_at)
        return list((await self._session.execute(stmt)).scalars().all())

    async def get(self, room_id: uuid.UUID) -> Room | None:
        return await self._session.get(Room, room_id)

    async def create(self, *, name: str, description: str = "") -> Room:
        room = Room(name=name, description=description)
        self._session.add(room)
        await self._session.flush()
        return room

    async def ensure_default_room(self) -> Room | None:
        # Only seeds an empty table; returns the room when one was created.
        count = (await self._session.execute(select(func.count(Room.id)))).scalar_one()
        if count:
            return None
        return await self.create(name=DEFAULT_ROOM_NAME, description=DEFAULT_ROOM_DESCRIPTION)
