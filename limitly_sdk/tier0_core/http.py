"""
limitly_sdk.tier0_core.http
────────────────────────────
HTTP primitives: the status codes the SDK emits or inspects, the verbs
HttpClient supports, and the typed response envelopes every Limitly
endpoint returns.
"""
from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


# ── Status code constants ──────────────────────────────────────────────────

class HTTP:
    """HTTP status codes used by the SDK."""

    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    TOO_MANY_REQUESTS = 429

    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        return self in (HttpMethod.POST, HttpMethod.PUT)


# ── Response envelopes ─────────────────────────────────────────────────────

class _Envelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = False
    error: str | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.success and self.error is None


class ApiResponse(_Envelope, Generic[T]):
    """Envelope returned by every Limitly endpoint."""

    data: T | None = None


class PaginatedResponse(_Envelope, Generic[T]):
    """List envelope; ``count`` is the total when the server reports it."""

    data: list[T] | None = None
    count: int | None = None


__all__ = ["HTTP", "HttpMethod", "ApiResponse", "PaginatedResponse"]
