"""
chitchat.services.auth_service

Registration, login and logout.

Responsibilities:
- Hash and verify passwords.
- Issue access tokens for authenticated users.
- Record revoked tokens on logout.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from chitchat.auth.jwt import JwtConfig, issue_token
from chitchat.auth.models import Principal
from chitchat.auth.passwords import PasswordHasher
from chitchat.db.models import User
from chitchat.db.repositories.revoked_tokens import RevokedTokenRepo
from chitchat.db.repositories.users import UserRepo
from chitchat.errors import AuthenticationError, InvalidCredentialsError, UserAlreadyExistsError
from chitchat.observability.logging import get_logger
from chitchat.settings import Settings

log = get_logger(__name__)


def _utcnow() -> datetime:
    # Matches the naive UTC timestamps stored by `db.models`.
    return datetime.now(tz=UTC).replace(tzinfo=None)


@dataclass(frozen=True, slots=True)
class AuthResult:
    user: User
    token: str


class AuthService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        settings: Settings,
        hasher: PasswordHasher,
    ) -> None:
        self._session = session
        self._jwt = JwtConfig.from_settings(settings)
        self._hasher = hasher

        self._users = UserRepo(session)
        self._revoked = RevokedTokenRepo(session)

    async def register(self, *, username: str, email: str, password: str) -> AuthResult:
        if await self._users.find_by_email(email) is not None:
            log.info("register_rejected", reason="email_taken")
            raise UserAlreadyExistsError()

        password_hash = await self._hasher.hash(password)
        try:
            user = await self._users.create(
                username=username,
                email=email,
                password_hash=password_hash,
            )
            await self._session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same email.
            await self._session.rollback()
            raise UserAlreadyExistsError() from e
        log.info("user_registered", user_id=str(user.id))
        return AuthResult(user=user, token=self._token_for(user))

    async def login(self, *, email: str, password: str) -> AuthResult:
        user = await self._users.find_by_email(email)
        if user is None or not await self._hasher.verify(password, user.password_hash):
            log.info("login_failed")
            raise InvalidCredentialsError()

        log.info("user_logged_in", user_id=str(user.id))
        return AuthResult(user=user, token=self._token_for(user))

    async def logout(self, principal: Principal | None) -> None:
        if principal is None:
            return
        await self._revoked.add(
            jti=principal.token_id,
            user_id=principal.user_id,
            expires_at=principal.expires_at,
        )
        purged = await self._revoked.purge_expired(_utcnow())
        await self._session.commit()
        log.info("user_logged_out", user_id=str(principal.user_id), purged_tokens=purged)

    async def profile(self, principal: Principal) -> User:
        user = await self._users.get(principal.user_id)
        if user is None:
            # Token outlived its account.
            raise AuthenticationError("User no longer exists")
        return user

    def _token_for(self, user: User) -> str:
        return issue_token(cfg=self._jwt, user_id=user.id, email=user.email).token
