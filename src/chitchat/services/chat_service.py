"""
chitchat.services.chat_service

Rooms and messages.
"""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from chitchat.db.models import Message, Room
from chitchat.db.repositories.messages import MessageRepo
from chitchat.db.repositories.rooms import RoomRepo
from chitchat.db.repositories.users import UserRepo
from chitchat.errors import BadRequestError, NotFoundError
from chitchat.observability.logging import get_logger

log = get_logger(__name__)


class ChatService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session

        self._rooms = RoomRepo(session)
        self._messages = MessageRepo(session)
        self._users = UserRepo(session)

    async def get_rooms(self) -> list[Room]:
        return await self._rooms.find_all()

    async def create_room(self, *, name: str | None, description: str | None = None) -> Room:
        name = (name or "").strip()
        if not name:
            raise BadRequestError("Room name is required")

        room = await self._rooms.create(name=name, description=description or "")
        await self._session.commit()
        log.info("room_created", room_id=str(room.id))
        return room

    async def get_messages(self, room_id: uuid.UUID, *, limit: int = 100) -> list[Message]:
        if await self._rooms.get(room_id) is None:
            raise NotFoundError("Room")
        return await self._messages.find_by_room_id(room_id, limit=limit)

    async def send_message(
        self,
        *,
        room_id: uuid.UUID,
        content: str | None,
        user_id: uuid.UUID | None,
    ) -> Message:
        if not (content or "").strip():
            raise BadRequestError("Message content is required")
        if user_id is None:
            raise BadRequestError("userId is required")
        if await self._rooms.get(room_id) is None:
            raise NotFoundError("Room")
        if await self._users.get(user_id) is None:
            raise BadRequestError("User not found")

        msg = await self._messages.create(room_id=room_id, content=content, user_id=user_id)
        await self._session.commit()
        log.info("message_sent", room_id=str(room_id), message_id=str(msg.id))
        return msg
