"""Typed error values returned by the data layer.

Every failure that crosses the data layer boundary is one of the
``DomainError`` variants below, returned by value rather than raised.
Callers branch on the variant (or on ``kind``) and on ``status_code``;
user facing copy stays with the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

# Status codes the dashboard gives dedicated copy to
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_FORBIDDEN = 403
HTTP_CONFLICT = 409
HTTP_UNPROCESSABLE = 422
HTTP_TOO_MANY_REQUESTS = 429

_VALIDATION_STATUSES = frozenset({HTTP_BAD_REQUEST, HTTP_UNPROCESSABLE})


class ErrorKind(str, Enum):
    """Stable tag of each error variant."""

    NETWORK = "network"
    HTTP = "http"
    VALIDATION = "validation"


ErrorMessage = str | tuple[str, ...] | None


def _normalize_message(message: str | list[str] | tuple[str, ...] | None) -> ErrorMessage:
    if isinstance(message, list):
        return tuple(message)
    return message


@dataclass(frozen=True)
class DomainError:
    """Base of the closed error hierarchy.

    Attributes
    ----------
    status_code
        HTTP status of the failed response, ``None`` when no response
        reached the client
    message
        Server supplied ``message`` field, a string or a sequence of strings
    """

    kind: ClassVar[ErrorKind]

    status_code: int | None = None
    message: ErrorMessage = None

    @classmethod
    def from_status(
        cls,
        status_code: int | None,
        message: str | list[str] | tuple[str, ...] | None = None,
    ) -> DomainError:
        """Pick the variant matching a transport outcome."""
        if status_code is None:
            return NetworkError()
        if status_code in _VALIDATION_STATUSES:
            return ValidationError(status_code, _normalize_message(message))
        return HttpError(status_code, _normalize_message(message))

    @property
    def messages(self) -> list[str]:
        """Non-blank server messages, in server order."""
        if isinstance(self.message, str):
            candidates: tuple[str, ...] = (self.message,)
        elif self.message is None:
            candidates = ()
        else:
            candidates = self.message
        return [m for m in candidates if isinstance(m, str) and m.strip()]

    def display_message(self, fallback: str) -> str:
        """Server messages joined by newlines, or the caller's fallback."""
        messages = self.messages
        if not messages:
            return fallback
        return "\n".join(messages)

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == HTTP_UNAUTHORIZED

    @property
    def is_forbidden(self) -> bool:
        return self.status_code == HTTP_FORBIDDEN

    @property
    def is_conflict(self) -> bool:
        return self.status_code == HTTP_CONFLICT

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == HTTP_TOO_MANY_REQUESTS

    def __str__(self) -> str:
        return self.display_message(self.kind.value)


@dataclass(frozen=True)
class NetworkError(DomainError):
    """No response reached the client (connection failure or timeout)."""

    kind: ClassVar[ErrorKind] = ErrorKind.NETWORK


@dataclass(frozen=True)
class HttpError(DomainError):
    """The server answered with a non-2xx status."""

    kind: ClassVar[ErrorKind] = ErrorKind.HTTP


@dataclass(frozen=True)
class ValidationError(HttpError):
    """400-class rejection of the request payload.

    Handled like any ``HttpError`` at this layer; field level decoding is
    left to the caller.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION
