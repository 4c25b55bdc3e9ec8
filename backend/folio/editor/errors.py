"""Errors raised by the editor's content client.

Every error inherits from :class:`EditorError` and carries a machine-readable
``code`` (from :class:`ErrorCode`), a human-readable ``message`` and an
optional ``context`` dict. The session maps them to user-facing messages;
none of them implies that any part of a save was applied.
"""
from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    AUTH_EXPIRED = "AUTH_EXPIRED"
    CONTENT_REJECTED = "CONTENT_REJECTED"
    SERVER_ERROR = "SERVER_ERROR"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    LOAD_FAILED = "LOAD_FAILED"


class EditorError(Exception):
    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class AuthenticationExpired(EditorError):
    """The server answered 401: the admin session is gone."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.AUTH_EXPIRED, message, context)


class ContentRejected(EditorError):
    """The server refused the request as invalid (400/404/422).

    Context keys: ``status_code``, ``details``.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.CONTENT_REJECTED, message, context)

    @property
    def details(self) -> list[dict[str, Any]]:
        return self.context.get("details", [])


class ServerError(EditorError):
    """The server failed (5xx). Nothing was applied."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.SERVER_ERROR, message, context)


class SaveTimeout(EditorError):
    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(ErrorCode.TIMEOUT, message, cause=cause)


class NetworkError(EditorError):
    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(ErrorCode.NETWORK_ERROR, message, cause=cause)


class ContentLoadError(EditorError):
    """Loading a section failed; distinct from a section that is simply empty."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(ErrorCode.LOAD_FAILED, message, cause=cause)
