"""
tests.test_services

Service layer against a real (temporary) database session.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta

import pytest

from chitchat.auth.models import Principal
from chitchat.auth.passwords import PasswordHasher
from chitchat.db.models import Message, RevokedToken
from chitchat.db.repositories.messages import MessageRepo
from chitchat.db.repositories.revoked_tokens import RevokedTokenRepo
from chitchat.db.repositories.rooms import RoomRepo
from chitchat.errors import (
    AuthenticationError,
    BadRequestError,
    InvalidCredentialsError,
    NotFoundError,
    UserAlreadyExistsError,
)
from chitchat.services.auth_service import AuthService
from chitchat.services.chat_service import ChatService


def _auth(session, settings) -> AuthService:
    return AuthService(session=session, settings=settings, hasher=PasswordHasher(rounds=4))


@pytest.mark.asyncio
async def test_register_stores_hash_not_password(session, settings) -> None:
    result = await _auth(session, settings).register(
        username="alice", email="alice@example.com", password="pw"
    )
    assert result.user.password_hash != "pw"
    assert result.user.password_hash.startswith("$2")
    assert result.token


@pytest.mark.asyncio
async def test_register_duplicate(session, settings) -> None:
    svc = _auth(session, settings)
    await svc.register(username="alice", email="alice@example.com", password="pw")
    with pytest.raises(UserAlreadyExistsError) as exc:
        await svc.register(username="alice2", email="alice@example.com", password="pw")
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_login_failures(session, settings) -> None:
    svc = _auth(session, settings)
    await svc.register(username="alice", email="alice@example.com", password="pw")
    with pytest.raises(InvalidCredentialsError):
        await svc.login(email="alice@example.com", password="wrong")
    with pytest.raises(InvalidCredentialsError):
        await svc.login(email="nobody@example.com", password="pw")


@pytest.mark.asyncio
async def test_logout_records_revocation(session, settings) -> None:
    svc = _auth(session, settings)
    result = await svc.register(username="alice", email="alice@example.com", password="pw")
    principal = Principal(
        user_id=result.user.id,
        email=result.user.email,
        token_id="abc",
        expires_at=result.user.created_at + timedelta(days=7),
    )
    await svc.logout(principal)
    assert await RevokedTokenRepo(session).is_revoked("abc")
    assert not await RevokedTokenRepo(session).is_revoked("other")

    await svc.logout(None)


@pytest.mark.asyncio
async def test_profile_of_deleted_user(session, settings) -> None:
    principal = Principal(
        user_id=uuid.uuid4(), email="ghost@example.com", token_id="t", expires_at=None
    )
    with pytest.raises(AuthenticationError):
        await _auth(session, settings).profile(principal)


@pytest.mark.asyncio
async def test_chat_flow(session, settings) -> None:
    user = (
        await _auth(session, settings).register(
            username="alice", email="alice@example.com", password="pw"
        )
    ).user
    chat = ChatService(session=session)

    room = await chat.create_room(name="  Dev  ", description=None)
    assert room.name == "Dev"
    assert room.description == ""

    msg = await chat.send_message(room_id=room.id, content="hello", user_id=user.id)
    assert msg.room_id == room.id

    messages = await chat.get_messages(room.id)
    assert [m.content for m in messages] == ["hello"]


@pytest.mark.asyncio
async def test_chat_errors(session) -> None:
    chat = ChatService(session=session)
    with pytest.raises(BadRequestError):
        await chat.create_room(name=None)
    with pytest.raises(NotFoundError):
        await chat.get_messages(uuid.uuid4())
    with pytest.raises(NotFoundError):
        await chat.send_message(room_id=uuid.uuid4(), content="x", user_id=uuid.uuid4())


@pytest.mark.asyncio
async def test_default_room_seeded_once(session) -> None:
    rooms = RoomRepo(session)
    # The app fixture already seeded it.
    assert await rooms.ensure_default_room() is None
    assert [r.name for r in await rooms.find_all()] == ["General"]


@pytest.mark.asyncio
async def test_logout_purges_expired_revocations(app, session, settings) -> None:
    svc = _auth(session, settings)
    result = await svc.register(username="alice", email="alice@example.com", password="pw")
    now = result.user.created_at
    session.add(
        RevokedToken(jti="stale", user_id=result.user.id, expires_at=now - timedelta(days=1))
    )
    await session.commit()

    await svc.logout(
        Principal(
            user_id=result.user.id,
            email=result.user.email,
            token_id="fresh",
            expires_at=now + timedelta(days=7),
        )
    )

    async with app.state.sessionmaker() as fresh:
        revoked = RevokedTokenRepo(fresh)
        assert not await revoked.is_revoked("stale")
        assert await revoked.is_revoked("fresh")


@pytest.mark.asyncio
async def test_messages_with_identical_timestamps_keep_send_order(session, settings) -> None:
    user = (
        await _auth(session, settings).register(
            username="alice", email="alice@example.com", password="pw"
        )
    ).user
    room = await ChatService(session=session).create_room(name="Dev")

    stamp = datetime(2026, 1, 1, 12, 0, 0)
    contents = [f"m{i}" for i in range(10)]
    for text in contents:
        session.add(
            Message(
                content=text,
                user_id=user.id,
                room_id=room.id,
                created_at=stamp,
                updated_at=stamp,
            )
        )
        await session.flush()
    await session.commit()

    messages = await MessageRepo(session).find_by_room_id(room.id)
    assert [m.content for m in messages] == contents

    latest = await MessageRepo(session).find_by_room_id(room.id, limit=3)
    assert [m.content for m in latest] == contents[-3:]
