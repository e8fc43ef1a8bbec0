"""
chitchat.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue access tokens for registered users.
- Decode and validate tokens with strict claim requirements (iss/aud/exp/iat/sub/jti).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from chitchat.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str
    ttl: timedelta = timedelta(days=7)

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
            ttl=timedelta(days=settings.jwt_ttl_days),
        )


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str
    jti: str
    expires_at: datetime


class JwtValidationError(Exception):
    pass


def issue_token(*, cfg: JwtConfig, user_id: uuid.UUID, email: str) -> IssuedToken:
    now = datetime.now(tz=UTC)
    expires_at = now + cfg.ttl
    jti = uuid.uuid4().hex
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": str(user_id),
        "email": email,
        "jti": jti,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return IssuedToken(
        token=jwt.encode(payload, cfg.secret, algorithm=cfg.alg),
        jti=jti,
        expires_at=expires_at,
    )


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iat", "iss", "aud", "sub", "jti"],
            },
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


# --- Module Notes -----------------------------------------------------------
# `jti` is what logout revokes; see `db.repositories.revoked_tokens`.
