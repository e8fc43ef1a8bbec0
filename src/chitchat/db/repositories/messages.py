"""
chitchat.db.repositories.messages

Repository for `Message` entities.
"""

from __future__ import annotations

import uuid

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from chitchat.db.models import Message


class MessageRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_room_id(self, room_id: uuid.UUID, *, limit: int = 100) -> list[Message]:
        # Fetch the newest `limit` rows, then return them oldest-first for display.
        stmt = (
            select(Message)
            .where(Message.room_id == room_id)
            .order_by(desc(Message.seq))
            .limit(limit)
        )
        rows = list((await self._session.execute(stmt)).scalars().all())
        rows.reverse()
        return rows

    async def create(self, *, room_id: uuid.UUID, content: str, user_id: uuid.UUID) -> Message:
        msg = Message(room_id=room_id, content=content, user_id=user_id)
        self._session.add(msg)
        await self._session.flush()
        return msg
