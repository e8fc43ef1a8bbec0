"""
chitchat.auth.passwords

bcrypt password hashing via passlib.

bcrypt is deliberately slow (hundreds of ms at 12 rounds), so both operations
run in a worker thread and are awaited from request handlers.
"""

from __future__ import annotations

import asyncio

from passlib.context import CryptContext

# bcrypt only looks at the first 72 bytes of the secret.
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    def __init__(self, *, rounds: int = 12) -> None:
        self._ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self._ctx.hash, _truncate(password))

    async def verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self._ctx.verify, _truncate(password), password_hash)


def _truncate(password: str) -> str:
    # Cut on a byte boundary, dropping a split multi-byte character at the end.
    raw = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
    return raw.decode("utf-8", errors="ignore")
