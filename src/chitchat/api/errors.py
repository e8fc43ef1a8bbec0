"""
chitchat.api.errors

Exception handlers rendering every failure into the response envelope.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from chitchat.api.schemas import fail
from chitchat.errors import ChitChatError
from chitchat.observability.logging import get_logger

log = get_logger(__name__)


def _render(status_code: int, message: str, data=None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=fail(message, data).model_dump(mode="json"),
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ChitChatError)
    async def chitchat_error_handler(request: Request, exc: ChitChatError) -> JSONResponse:
        log.info("request_failed", status_code=exc.status_code, error=exc.message)
        headers = None
        if exc.status_code == HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return _render(exc.status_code, exc.message, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Raw error dicts may carry exception objects in `ctx`; keep the plain fields.
        errors = [
            {
                "loc": [str(p) for p in e.get("loc", ())],
                "msg": e.get("msg", ""),
                "type": e.get("type", ""),
            }
            for e in exc.errors()
        ]
        log.info("request_invalid", errors=errors)
        return _render(HTTP_400_BAD_REQUEST, "Invalid request", data=errors)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _render(exc.status_code, str(exc.detail), headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        log.exception("unhandled_error")
        return _render(HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# --- Module Notes -----------------------------------------------------------
# Every failure, including unknown routes, leaves the API as `{success: false, ...}`.
