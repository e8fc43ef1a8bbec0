"""
tests.conftest

Shared fixtures: an app bound to a temporary SQLite file and an in-process client.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from chitchat.api.app import create_app
from chitchat.settings import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'chitchat.db'}",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx's ASGITransport does not run the lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def session(app: FastAPI) -> AsyncIterator[AsyncSession]:
    async with app.state.sessionmaker() as s:
        yield s


async def register(
    client: httpx.AsyncClient,
    *,
    username: str = "alice",
    email: str = "alice@example.com",
    password: str = "s3cret-pass",
) -> dict:
    r = await client.post(
        "/register", json={"username": username, "email": email, "password": password}
    )
    assert r.status_code == 201, r.text
    # `{user, token}` lives under data.user for register.
    return r.json()["data"]["user"]
