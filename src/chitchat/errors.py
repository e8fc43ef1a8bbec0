"""
chitchat.errors

Domain exceptions raised by the service layer.

Each exception carries the HTTP status it maps to; the API layer renders
them into the response envelope (see `chitchat.api.errors`).
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class ChitChatError(Exception):
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BadRequestError(ChitChatError):
    status_code = HTTP_400_BAD_REQUEST


class UserAlreadyExistsError(BadRequestError):
    def __init__(self) -> None:
        super().__init__("User with this email already exists")


class AuthenticationError(ChitChatError):
    status_code = HTTP_401_UNAUTHORIZED


class InvalidCredentialsError(AuthenticationError):
    def __init__(self) -> None:
        # Same message for unknown email and wrong password.
        super().__init__("Invalid credentials")


class NotFoundError(ChitChatError):
    status_code = HTTP_404_NOT_FOUND

    def __init__(self, resource: str) -> None:
        self.resource = resource
        super().__init__(f"{resource} not found")
