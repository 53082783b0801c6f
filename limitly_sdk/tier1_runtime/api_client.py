"""
limitly_sdk.tier1_runtime.api_client
─────────────────────────────────────
HTTP client for the Limitly API. Adds the bearer auth header, resolves
per-call timeouts and headers, and normalizes every failure into a single
LimitlyError. One outbound request per call: no retries, no caching.

Backed by: httpx (async HTTP).
"""
from __future__ import annotations

import time
from typing import Any, Type, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field

from limitly_sdk.tier0_core.config import ClientConfig
from limitly_sdk.tier0_core.errors import LimitlyError
from limitly_sdk.tier0_core.http import HTTP, HttpMethod
from limitly_sdk.tier0_core.logging import get_logger
from limitly_sdk.tier0_core.redact import mask_api_key

M = TypeVar("M", bound=BaseModel)

log = get_logger(__name__)


class RequestOptions(BaseModel):
    """
    Per-call overrides. ``timeout`` is in milliseconds.

    ``cache``, ``revalidate`` and ``tags`` are hints for a caller-side fetch
    cache and are not interpreted by the SDK.
    """

    model_config = ConfigDict(frozen=True)

    timeout: int | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    cache: bool | None = None
    revalidate: int | None = None
    tags: list[str] | None = None


def _encode_body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return body


def _decode(response: httpx.Response) -> Any:
    if response.headers.get("content-type", "").startswith("application/json"):
        return response.json()
    return response.text


def _decode_error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class HttpClient:
    """
    Async HTTP client for the Limitly API.

    Usage::

        client = HttpClient(ClientConfig(api_key="lim_..."))
        plans = await client.get("/plans")
        created = await client.post("/plans", {"name": "Pro", "max_requests": 1000,
                                               "request_period": "month"})

    ``transport`` is passed straight to ``httpx.AsyncClient``; tests use it
    to inject ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def masked_api_key(self) -> str:
        return mask_api_key(self._config.api_key)

    def _build_headers(self, options: RequestOptions | None) -> dict[str, str]:
        headers: dict[str, str] = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        headers.update(self._config.headers)
        if options is not None:
            headers.update(options.headers)
        return headers

    def _resolve_timeout(self, options: RequestOptions | None) -> float:
        timeout_ms = self._config.timeout
        if options is not None and options.timeout is not None:
            timeout_ms = options.timeout
        return timeout_ms / 1000

    async def get(
        self,
        path: str,
        options: RequestOptions | None = None,
        *,
        model: Type[M] | None = None,
    ) -> Any:
        return await self.request(HttpMethod.GET, path, options=options, model=model)

    async def post(
        self,
        path: str,
        body: Any = None,
        options: RequestOptions | None = None,
        *,
        model: Type[M] | None = None,
    ) -> Any:
        return await self.request(HttpMethod.POST, path, body, options, model=model)

    async def put(
        self,
        path: str,
        body: Any = None,
        options: RequestOptions | None = None,
        *,
        model: Type[M] | None = None,
    ) -> Any:
        return await self.request(HttpMethod.PUT, path, body, options, model=model)

    async def delete(
        self,
        path: str,
        options: RequestOptions | None = None,
        *,
        model: Type[M] | None = None,
    ) -> Any:
        return await self.request(HttpMethod.DELETE, path, options=options, model=model)

    async def request(
        self,
        method: HttpMethod | str,
        path: str,
        body: Any = None,
        options: RequestOptions | None = None,
        *,
        model: Type[M] | None = None,
    ) -> Any:
        """
        Send one request and return the decoded payload, or ``model`` parsed
        from it when given. A success with no body (204) returns None.
        Raises LimitlyError on any failure.

        ``path`` is appended to the base URL verbatim.
        """
        start = time.perf_counter()
        try:
            if not isinstance(method, HttpMethod):
                method = HttpMethod(method.upper())
            url = f"{self._config.base_url}{path}"
            kwargs: dict[str, Any] = {"headers": self._build_headers(options)}
            if method.has_body and body is not None:
                kwargs["json"] = _encode_body(body)

            async with httpx.AsyncClient(
                timeout=self._resolve_timeout(options),
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.request(method.value, url, **kwargs)

            log.debug(
                "limitly.request",
                method=method.value,
                path=path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )

            if not response.is_success:
                raise LimitlyError.from_response(
                    response.status_code,
                    response.reason_phrase,
                    _decode_error_body(response),
                )

            if response.status_code == HTTP.NO_CONTENT or not response.content:
                return None

            payload = _decode(response)
            if model is not None:
                return model.model_validate(payload)
            return payload
        except LimitlyError as exc:
            self._log_failure(path, exc)
            raise
        except httpx.RequestError as exc:
            error = LimitlyError.from_transport(exc)
            self._log_failure(path, error)
            raise error from exc
        except Exception as exc:
            error = LimitlyError.unknown()
            self._log_failure(path, error)
            raise error from exc

    @staticmethod
    def _log_failure(path: str, error: LimitlyError) -> None:
        log.warning(
            "limitly.request_failed",
            path=path,
            kind=error.kind.value,
            status_code=error.status_code,
            error=error.message,
        )


__all__ = ["HttpClient", "RequestOptions"]
