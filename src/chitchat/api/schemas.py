"""
chitchat.api.schemas

Request bodies, entity views and the response envelope.

Wire format uses camelCase keys (`userId`, `createdAt`, ...); the envelope is
always `{success, message, data}`.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ApiResponse(BaseModel):
    success: bool
    message: str | None = None
    data: Any = None


def ok(data: Any = None, message: str | None = None) -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data)


def fail(message: str, data: Any = None) -> ApiResponse:
    return ApiResponse(success=False, message=message, data=data)


# --- Requests ---------------------------------------------------------------
# Fields are optional so that missing values surface as the domain's own 400
# messages rather than generic validation errors.


class RegisterRequest(_CamelModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(_CamelModel):
    email: str | None = None
    password: str | None = None


class CreateRoomRequest(_CamelModel):
    name: str | None = None
    description: str | None = None


class SendMessageRequest(_CamelModel):
    content: str | None = None
    user_id: uuid.UUID | None = None


# --- Views ------------------------------------------------------------------


class UserView(_CamelModel):
    id: uuid.UUID
    username: str
    email: str


class RoomView(_CamelModel):
    id: uuid.UUID
    name: str
    description: str
    created_at: datetime
    updated_at: datetime


class MessageView(_CamelModel):
    id: uuid.UUID
    content: str
    user_id: uuid.UUID
    room_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
