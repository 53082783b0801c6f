"""
limitly_sdk.tier0_core.errors
──────────────────────────────
The one error shape every failed Limitly call is normalized into.

LimitlyError is raised, but it also carries a tagged ``kind`` so callers can
branch on what went wrong without isinstance checks:

    try:
        await limitly.plans.get("plan_1")
    except LimitlyError as exc:
        if exc.kind is ErrorKind.TRANSPORT:
            ...  # no response arrived, status_code == 0
        elif exc.status_code == 404:
            ...
"""
from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """What produced a LimitlyError."""

    RESPONSE = "response_error"        # HTTP response with a failing status
    TRANSPORT = "transport_error"      # request sent, no response (DNS, connect, timeout)
    UNKNOWN = "unknown_error"          # anything not classifiable
    MISSING_API_KEY = "missing_api_key"  # raised by the gate, never by HttpClient


class LimitlyError(Exception):
    """
    Normalized error for every failed Limitly call.

    - kind: ErrorKind tag
    - message: human-readable message (also ``str(exc)``)
    - status_code: HTTP status, or 0 when no HTTP response was received
    - response: raw response body or transport context, if any
    """

    code: str = "limitly_error"

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response: Any = None,
        *,
        kind: ErrorKind = ErrorKind.UNKNOWN,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.response = response
        self.kind = kind
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"LimitlyError(kind={self.kind.value!r}, status_code={self.status_code}, "
            f"message={self.message!r})"
        )

    @classmethod
    def from_response(cls, status_code: int, reason_phrase: str, body: Any) -> LimitlyError:
        """Build a RESPONSE error, preferring the body's ``error`` field."""
        message = None
        if isinstance(body, dict):
            message = body.get("error")
        if not message:
            message = f"HTTP {status_code}: {reason_phrase}"
        return cls(str(message), status_code, body, kind=ErrorKind.RESPONSE)

    @classmethod
    def from_transport(cls, exc: BaseException) -> LimitlyError:
        """Build a TRANSPORT error for a request that never got a response."""
        detail = str(exc) or exc.__class__.__name__
        return cls(
            f"Network error: {detail}",
            0,
            {"originalError": detail},
            kind=ErrorKind.TRANSPORT,
        )

    @classmethod
    def unknown(cls) -> LimitlyError:
        return cls("Unknown error occurred", 0, kind=ErrorKind.UNKNOWN)

    @property
    def is_transport_error(self) -> bool:
        return self.kind is ErrorKind.TRANSPORT

    @property
    def is_response_error(self) -> bool:
        return self.kind is ErrorKind.RESPONSE

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.kind.value,
                "message": self.message,
                "status_code": self.status_code,
            }
        }


__all__ = ["ErrorKind", "LimitlyError"]
