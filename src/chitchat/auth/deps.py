"""
chitchat.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Convert a bearer token into a typed `Principal`.
- Reject revoked tokens (see `POST /logout`).
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from chitchat.api.deps import db_session, settings_dep
from chitchat.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from chitchat.auth.models import Principal
from chitchat.db.repositories.revoked_tokens import RevokedTokenRepo
from chitchat.errors import AuthenticationError
from chitchat.observability.logging import get_logger
from chitchat.settings import Settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def _principal_from_token(
    token: str, *, settings: Settings, session: AsyncSession
) -> Principal:
    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=token)
    except JwtValidationError as e:
        log.info("token_rejected", reason=str(e))
        raise AuthenticationError("Invalid or expired token") from e

    try:
        user_id = uuid.UUID(str(payload["sub"]))
    except ValueError as e:
        raise AuthenticationError("Invalid token subject") from e

    jti = str(payload["jti"])
    if await RevokedTokenRepo(session).is_revoked(jti):
        raise AuthenticationError("Token has been revoked")

    expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC).replace(tzinfo=None)
    return Principal(
        user_id=user_id,
        email=str(payload.get("email", "")),
        token_id=jti,
        expires_at=expires_at,
    )


async def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
    session: AsyncSession = Depends(db_session),
) -> Principal:
    if creds is None or not creds.credentials:
        raise AuthenticationError("Missing bearer token")
    return await _principal_from_token(creds.credentials, settings=settings, session=session)


async def get_optional_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
    session: AsyncSession = Depends(db_session),
) -> Principal | None:
    # A token that is present must still be valid; only absence is tolerated.
    if creds is None or not creds.credentials:
        return None
    return await _principal_from_token(creds.credentials, settings=settings, session=session)


async def get_logout_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
    session: AsyncSession = Depends(db_session),
) -> Principal | None:
    # Logout succeeds even with a stale token; there is just nothing to revoke.
    if creds is None or not creds.credentials:
        return None
    try:
        return await _principal_from_token(creds.credentials, settings=settings, session=session)
    except AuthenticationError as e:
        log.info("logout_token_ignored", reason=e.message)
        return None
