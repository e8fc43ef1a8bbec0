"""
chitchat.api.routers.auth

Account endpoints: register, login, logout, current profile.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from chitchat.api.deps import db_session, password_hasher_dep, settings_dep
from chitchat.api.schemas import (
    ApiResponse,
    LoginRequest,
    RegisterRequest,
    UserView,
    ok,
)
from chitchat.auth.deps import get_logout_principal, get_principal
from chitchat.auth.models import Principal
from chitchat.auth.passwords import PasswordHasher
from chitchat.errors import BadRequestError
from chitchat.services.auth_service import AuthResult, AuthService
from chitchat.settings import Settings

router = APIRouter(tags=["auth"])


def _auth_service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
    hasher: PasswordHasher = Depends(password_hasher_dep),
) -> AuthService:
    return AuthService(session=session, settings=settings, hasher=hasher)


def _auth_payload(result: AuthResult) -> dict:
    return {"user": UserView.model_validate(result.user).to_wire(), "token": result.token}


@router.post("/register", response_model=ApiResponse, status_code=HTTP_201_CREATED)
async def register(
    body: RegisterRequest | None = None,
    svc: AuthService = Depends(_auth_service),
) -> ApiResponse:
    body = body or RegisterRequest()
    if not body.username or not body.email or not body.password:
        raise BadRequestError("Username, email, and password are required")

    result = await svc.register(username=body.username, email=body.email, password=body.password)
    # Register nests the auth result one level deeper than login: data.user = {user, token}.
    return ok({"user": _auth_payload(result)}, "User registered successfully")


@router.post("/login", response_model=ApiResponse)
async def login(
    body: LoginRequest | None = None,
    svc: AuthService = Depends(_auth_service),
) -> ApiResponse:
    body = body or LoginRequest()
    if not body.email or not body.password:
        raise BadRequestError("Email and password are required")

    result = await svc.login(email=body.email, password=body.password)
    return ok(_auth_payload(result), "Login successful")


@router.post("/logout", response_model=ApiResponse)
async def logout(
    principal: Principal | None = Depends(get_logout_principal),
    svc: AuthService = Depends(_auth_service),
) -> ApiResponse:
    await svc.logout(principal)
    return ok(message="Logout successful")


@router.get("/me", response_model=ApiResponse)
async def me(
    principal: Principal = Depends(get_principal),
    svc: AuthService = Depends(_auth_service),
) -> ApiResponse:
    user = await svc.profile(principal)
    return ok({"user": UserView.model_validate(user).to_wire()}, "Profile retrieved successfully")
