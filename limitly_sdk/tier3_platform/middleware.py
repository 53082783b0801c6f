"""
limitly_sdk.tier3_platform.middleware
──────────────────────────────────────
Request gating: check every inbound request against ``POST /validate`` before
it reaches application code.

Three adapters, one decision:
  - create_middleware()      callback-style ``(req, res, next)`` middleware
  - with_rate_limit()        wraps a Starlette/FastAPI handler (or decorates one)
  - LimitlyASGIMiddleware    ASGI middleware for a whole app

Each ends in exactly one of: 401 (no API key), 500 (validation call failed),
429 (not allowed), or the request proceeds. Nothing is retried or remembered
between requests.
"""
from __future__ import annotations

import functools
import inspect
from typing import Any, Awaitable, Callable, Iterable, Mapping, Protocol

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from limitly_sdk.tier0_core.errors import ErrorKind, LimitlyError
from limitly_sdk.tier0_core.http import HTTP
from limitly_sdk.tier0_core.logging import get_logger
from limitly_sdk.tier2_resources.validation import ValidationModule

log = get_logger(__name__)

DEFAULT_API_KEY_HEADER = "authorization"
BEARER_PREFIX = "Bearer "

API_KEY_REQUIRED = "API Key required"
RATE_LIMIT_EXCEEDED = "Rate limit exceeded"
VALIDATION_ERROR = "Validation error"


# ── Host capabilities ──────────────────────────────────────────────────────

class GateRequest(Protocol):
    """What the callback middleware reads from the host request."""

    @property
    def headers(self) -> Mapping[str, str]: ...

    @property
    def path(self) -> str: ...

    @property
    def method(self) -> str: ...


class GateResponse(Protocol):
    """What the callback middleware needs from the host response."""

    def status(self, code: int) -> GateResponse: ...

    def json(self, body: Any) -> Any: ...


RateLimitHook = Callable[[Any, Any], Any]
ValidationErrorHook = Callable[[Any, Any, BaseException], Any]
Handler = Callable[..., Awaitable[Response]]


# ── Credential extraction ──────────────────────────────────────────────────

def _read_header(headers: Mapping[str, str] | None, name: str) -> str | None:
    if not headers:
        return None
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, val in headers.items():
        if isinstance(key, str) and key.lower() == lowered:
            return val
    return None


def extract_api_key(
    headers: Mapping[str, str] | None,
    api_key_header: str = DEFAULT_API_KEY_HEADER,
) -> str | None:
    """
    Return the API key from *api_key_header*, falling back to Authorization.

    The first ``"Bearer "`` is stripped if present; a value without the prefix
    is used as-is, so a raw key in the Authorization header is accepted.
    """
    for name in (api_key_header, DEFAULT_API_KEY_HEADER):
        value = _read_header(headers, name)
        if value:
            api_key = value.replace(BEARER_PREFIX, "", 1)
            if api_key:
                return api_key
    return None


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


# ── Callback-style middleware ──────────────────────────────────────────────

def create_middleware(
    validation: ValidationModule,
    *,
    api_key_header: str = DEFAULT_API_KEY_HEADER,
    on_rate_limit_exceeded: RateLimitHook | None = None,
    on_validation_error: ValidationErrorHook | None = None,
) -> Callable[..., Awaitable[None]]:
    """
    Build a ``(req, res, next=None)`` middleware.

    Hooks run before the gate's own response is sent; they are notified, they
    do not replace the 401/429/500. Errors never propagate to the caller.

    Usage::

        gate = limitly.create_middleware(on_rate_limit_exceeded=notify_ops)
        await gate(req, res, next)
    """

    async def middleware(req: GateRequest, res: GateResponse, next: Callable[[], Any] | None = None) -> None:
        try:
            api_key = extract_api_key(getattr(req, "headers", None), api_key_header)
            if not api_key:
                if on_validation_error is not None:
                    await _maybe_await(on_validation_error(
                        req, res,
                        LimitlyError(API_KEY_REQUIRED, HTTP.UNAUTHORIZED, kind=ErrorKind.MISSING_API_KEY),
                    ))
                res.status(HTTP.UNAUTHORIZED).json({"error": API_KEY_REQUIRED})
                return

            result = await validation.validate(api_key, req.path, req.method)

            if not result.allowed:
                if on_rate_limit_exceeded is not None:
                    await _maybe_await(on_rate_limit_exceeded(req, res))
                res.status(HTTP.TOO_MANY_REQUESTS).json({
                    "error": RATE_LIMIT_EXCEEDED,
                    "details": result.details_dict(),
                })
                return

            if next is not None:
                await _maybe_await(next())
        except Exception as exc:
            log.exception("limitly.gate.validation_error", path=getattr(req, "path", None))
            if on_validation_error is not None:
                try:
                    await _maybe_await(on_validation_error(req, res, exc))
                except Exception:
                    log.exception("limitly.gate.hook_failed", hook="on_validation_error")
            res.status(HTTP.INTERNAL_SERVER_ERROR).json({"error": VALIDATION_ERROR})

    return middleware


# ── Starlette request gate ─────────────────────────────────────────────────

async def check_request(
    validation: ValidationModule,
    request: Request,
    *,
    api_key_header: str = DEFAULT_API_KEY_HEADER,
    on_rate_limit_exceeded: Callable[[Request], Any] | None = None,
) -> Response | None:
    """Return the rejection response for *request*, or None if it may proceed."""
    api_key = extract_api_key(request.headers, api_key_header)
    if not api_key:
        return JSONResponse({"error": API_KEY_REQUIRED}, status_code=HTTP.UNAUTHORIZED)

    path = request.url.path
    try:
        result = await validation.validate(api_key, path, request.method)
        if not result.allowed:
            log.info("limitly.gate.rate_limited", path=path, method=request.method)
            if on_rate_limit_exceeded is not None:
                return await _maybe_await(on_rate_limit_exceeded(request))
            return JSONResponse(
                {"error": RATE_LIMIT_EXCEEDED, "details": result.details_dict()},
                status_code=HTTP.TOO_MANY_REQUESTS,
            )
    except Exception:
        log.exception("limitly.gate.validation_error", path=path, method=request.method)
        return JSONResponse({"error": VALIDATION_ERROR}, status_code=HTTP.INTERNAL_SERVER_ERROR)
    return None


def with_rate_limit(
    validation: ValidationModule,
    handler: Handler | None = None,
    *,
    api_key_header: str = DEFAULT_API_KEY_HEADER,
    on_rate_limit_exceeded: Callable[[Request], Any] | None = None,
) -> Any:
    """
    Wrap a ``handler(request, *args, **kwargs) -> Response`` so it only runs
    for requests the Limitly API allows. Errors raised by the handler itself
    are not caught.

    Usage::

        @limitly.with_rate_limit()
        async def list_users(request: Request) -> Response:
            return JSONResponse({"users": []})

        # or
        endpoint = limitly.with_rate_limit(list_users, on_rate_limit_exceeded=custom_429)
    """

    def decorate(fn: Handler) -> Handler:
        @functools.wraps(fn)
        async def wrapped(request: Request, *args: Any, **kwargs: Any) -> Response:
            rejection = await check_request(
                validation,
                request,
                api_key_header=api_key_header,
                on_rate_limit_exceeded=on_rate_limit_exceeded,
            )
            if rejection is not None:
                return rejection
            return await _maybe_await(fn(request, *args, **kwargs))

        return wrapped

    if handler is None:
        return decorate
    return decorate(handler)


# ── ASGI middleware ────────────────────────────────────────────────────────

class LimitlyASGIMiddleware:
    """
    ASGI middleware that gates every HTTP request through ``POST /validate``.

    Usage (FastAPI / Starlette)::

        app.add_middleware(
            LimitlyASGIMiddleware,
            validation=limitly.validation,
            exclude_paths=["/health"],
        )
    """

    def __init__(
        self,
        app: Any,
        validation: ValidationModule,
        *,
        api_key_header: str = DEFAULT_API_KEY_HEADER,
        exclude_paths: Iterable[str] = (),
    ) -> None:
        self.app = app
        self._validation = validation
        self._api_key_header = api_key_header
        self._exclude_paths = frozenset(exclude_paths)

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        if scope["type"] != "http" or scope.get("path", "") in self._exclude_paths:
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        rejection = await check_request(
            self._validation, request, api_key_header=self._api_key_header
        )
        if rejection is not None:
            await rejection(scope, receive, send)
            return
        await self.app(scope, receive, send)


__all__ = [
    "GateRequest",
    "GateResponse",
    "extract_api_key",
    "create_middleware",
    "check_request",
    "with_rate_limit",
    "LimitlyASGIMiddleware",
]
