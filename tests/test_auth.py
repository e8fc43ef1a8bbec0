"""
tests.test_auth

Password hashing and JWT helpers.
"""

from __future__ import annotations

import asyncio
import uuid
from datetime import timedelta

import jwt as pyjwt
import pytest

from chitchat.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate, issue_token
from chitchat.auth.passwords import PasswordHasher

CFG = JwtConfig(alg="HS256", issuer="chitchat-api", audience="chitchat", secret="k")


@pytest.mark.asyncio
async def test_password_roundtrip() -> None:
    hasher = PasswordHasher(rounds=4)
    h = await hasher.hash("hunter2")
    assert h != "hunter2"
    assert await hasher.verify("hunter2", h)
    assert not await hasher.verify("hunter3", h)


@pytest.mark.asyncio
async def test_password_longer_than_bcrypt_limit() -> None:
    hasher = PasswordHasher(rounds=4)
    long_pw = "a" + "é" * 100  # the 72 byte cut lands inside a character
    h = await hasher.hash(long_pw)
    assert await hasher.verify(long_pw, h)


@pytest.mark.asyncio
async def test_hashing_does_not_block_the_event_loop() -> None:
    # Production cost: a blocking call would freeze the loop for hundreds of ms.
    hasher = PasswordHasher(rounds=12)
    ticks = 0

    async def ticker() -> None:
        nonlocal ticks
        while True:
            await asyncio.sleep(0.001)
            ticks += 1

    task = asyncio.create_task(ticker())
    try:
        h = await hasher.hash("hunter2")
        assert await hasher.verify("hunter2", h)
    finally:
        task.cancel()

    assert ticks >= 5


def test_issue_and_decode() -> None:
    user_id = uuid.uuid4()
    issued = issue_token(cfg=CFG, user_id=user_id, email="a@example.com")
    claims = decode_and_validate(cfg=CFG, token=issued.token)
    assert claims["sub"] == str(user_id)
    assert claims["email"] == "a@example.com"
    assert claims["jti"] == issued.jti


def test_tokens_have_unique_ids() -> None:
    user_id = uuid.uuid4()
    a = issue_token(cfg=CFG, user_id=user_id, email="a@example.com")
    b = issue_token(cfg=CFG, user_id=user_id, email="a@example.com")
    assert a.jti != b.jti


def test_wrong_secret_rejected() -> None:
    issued = issue_token(cfg=CFG, user_id=uuid.uuid4(), email="a@example.com")
    other = JwtConfig(alg="HS256", issuer="chitchat-api", audience="chitchat", secret="other")
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=other, token=issued.token)


def test_expired_token_rejected() -> None:
    expired = JwtConfig(
        alg="HS256",
        issuer="chitchat-api",
        audience="chitchat",
        secret="k",
        ttl=timedelta(seconds=-10),
    )
    issued = issue_token(cfg=expired, user_id=uuid.uuid4(), email="a@example.com")
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=issued.token)


def test_missing_jti_rejected() -> None:
    token = pyjwt.encode(
        {"iss": "chitchat-api", "aud": "chitchat", "sub": "x", "iat": 0, "exp": 4102444800},
        "k",
        algorithm="HS256",
    )
    with pytest.raises(JwtValidationError):
        decode_and_validate(cfg=CFG, token=token)
