"""
chitchat.api.routers.chat

Room and message endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from chitchat.api.deps import db_session
from chitchat.api.schemas import (
    ApiResponse,
    CreateRoomRequest,
    MessageView,
    RoomView,
    SendMessageRequest,
    ok,
)
from chitchat.auth.deps import get_optional_principal
from chitchat.auth.models import Principal
from chitchat.services.chat_service import ChatService

router = APIRouter(prefix="/rooms", tags=["chat"])


def _chat_service(session: AsyncSession = Depends(db_session)) -> ChatService:
    return ChatService(session=session)


@router.get("", response_model=ApiResponse)
async def get_rooms(svc: ChatService = Depends(_chat_service)) -> ApiResponse:
    rooms = await svc.get_rooms()
    return ok([RoomView.model_validate(r).to_wire() for r in rooms])


@router.post("", response_model=ApiResponse, status_code=HTTP_201_CREATED)
async def create_room(
    body: CreateRoomRequest | None = None,
    svc: ChatService = Depends(_chat_service),
) -> ApiResponse:
    body = body or CreateRoomRequest()
    room = await svc.create_room(name=body.name, description=body.description)
    return ok(RoomView.model_validate(room).to_wire(), "Room created successfully")


@router.get("/{room_id}/messages", response_model=ApiResponse)
async def get_messages(
    room_id: uuid.UUID,
    limit: int = Query(default=100, ge=1, le=500),
    svc: ChatService = Depends(_chat_service),
) -> ApiResponse:
    messages = await svc.get_messages(room_id, limit=limit)
    return ok([MessageView.model_validate(m).to_wire() for m in messages])


@router.post("/{room_id}/messages", response_model=ApiResponse, status_code=HTTP_201_CREATED)
async def send_message(
    room_id: uuid.UUID,
    body: SendMessageRequest | None = None,
    principal: Principal | None = Depends(get_optional_principal),
    svc: ChatService = Depends(_chat_service),
) -> ApiResponse:
    body = body or SendMessageRequest()
    # An authenticated sender takes precedence over a client-supplied userId.
    user_id = principal.user_id if principal is not None else body.user_id
    message = await svc.send_message(room_id=room_id, content=body.content, user_id=user_id)
    return ok(MessageView.model_validate(message).to_wire(), "Message sent successfully")
