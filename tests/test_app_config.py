"""
tests.test_app_config

App factory behaviour that depends on settings: environment, route prefix, logging.
"""

from __future__ import annotations

import logging

import httpx
import pytest
import structlog

from chitchat.api.app import create_app
from chitchat.db.init_db import init_db
from chitchat.db.session import create_engine
from chitchat.observability.logging import configure_logging
from chitchat.settings import Settings


def _settings(tmp_path, **overrides) -> Settings:
    values = {
        "env": "test",
        "database_url": f"sqlite+aiosqlite:///{tmp_path / 'chitchat.db'}",
        "jwt_secret": "test-secret",
        "bcrypt_rounds": 4,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.mark.asyncio
async def test_prod_boots_before_migrations(tmp_path) -> None:
    app = create_app(settings=_settings(tmp_path, env="prod"))

    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            assert (await client.get("/healthz")).status_code == 200
            assert (await client.get("/readyz")).status_code == 200


@pytest.mark.asyncio
async def test_prod_seeds_default_room_once_schema_exists(tmp_path) -> None:
    settings = _settings(tmp_path, env="prod")
    # Stand-in for `alembic upgrade head`.
    engine = create_engine(settings)
    await init_db(engine)
    await engine.dispose()

    app = create_app(settings=settings)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.get("/rooms")

    assert r.status_code == 200
    assert [room["name"] for room in r.json()["data"]] == ["General"]


@pytest.mark.asyncio
async def test_api_prefix_applies_to_domain_routes_only(tmp_path) -> None:
    app = create_app(settings=_settings(tmp_path, api_prefix="/api"))

    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            assert (await client.get("/api/rooms")).status_code == 200
            assert (await client.get("/rooms")).status_code == 404

            r = await client.post(
                "/api/register",
                json={"username": "alice", "email": "alice@example.com", "password": "pw"},
            )
            assert r.status_code == 201
            assert (await client.post("/register", json={})).status_code == 404

            assert (await client.get("/healthz")).status_code == 200
            assert (await client.get("/api/healthz")).status_code == 404


def test_log_level_filters_and_secrets_are_redacted(caplog) -> None:
    configure_logging(service_name="chitchat-test", level="WARNING")
    log = structlog.get_logger("chitchat.test")

    with caplog.at_level(logging.DEBUG):
        log.info("below_threshold")
        log.warning("credentials_event", password="hunter2", token="abc.def.ghi", email="a@b.c")

    assert "below_threshold" not in caplog.text
    assert "credentials_event" in caplog.text
    assert "hunter2" not in caplog.text
    assert "abc.def.ghi" not in caplog.text
    assert '"service": "chitchat-test"' in caplog.text
    assert "a@b.c" in caplog.text
