"""
chitchat.db.repositories.revoked_tokens

Repository for `RevokedToken` entries written on logout.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from chitchat.db.models import RevokedToken


class RevokedTokenRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, *, jti: str, user_id: uuid.UUID, expires_at: datetime) -> None:
        # Logging out twice with the same token is a no-op.
        if await self._session.get(RevokedToken, jti) is not None:
            return
        self._session.add(RevokedToken(jti=jti, user_id=user_id, expires_at=expires_at))
        await self._session.flush()

    async def is_revoked(self, jti: str) -> bool:
        return await self._session.get(RevokedToken, jti) is not None

    async def purge_expired(self, now: datetime) -> int:
        # An expired token fails validation on its own; its row is dead weight.
        stmt = delete(RevokedToken).where(RevokedToken.expires_at <= now)
        result = await self._session.execute(stmt)
        return result.rowcount or 0
