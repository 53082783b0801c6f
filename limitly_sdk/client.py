"""
limitly_sdk.client
───────────────────
The Limitly facade: one HttpClient shared by the resource modules, plus the
request-gating helpers bound to this client's validation module.
"""
from __future__ import annotations

from typing import Any

import httpx

from limitly_sdk.tier0_core.config import ClientConfig, get_settings
from limitly_sdk.tier1_runtime.api_client import HttpClient
from limitly_sdk.tier2_resources.api_keys import ApiKeysModule
from limitly_sdk.tier2_resources.plans import PlansModule
from limitly_sdk.tier2_resources.users import UsersModule
from limitly_sdk.tier2_resources.validation import ValidationModule
from limitly_sdk.tier3_platform.middleware import (
    LimitlyASGIMiddleware,
    create_middleware,
    with_rate_limit,
)


class Limitly:
    """
    Limitly API client.

    Usage::

        limitly = Limitly(api_key="lim_...")

        async def handler(request: Request) -> Response:
            auth = request.headers.get("authorization", "")
            result = await limitly.validation.validate(
                auth.replace("Bearer ", "", 1), "/api/users", "GET"
            )
            if not result.allowed:
                return JSONResponse({"error": "Rate limit exceeded"}, status_code=429)
            return JSONResponse({"message": "Request allowed"})
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        **config_kwargs: Any,
    ) -> None:
        if config is None:
            config = ClientConfig(**config_kwargs)
        elif config_kwargs:
            raise TypeError("Pass either a ClientConfig or keyword settings, not both")

        self._client = HttpClient(config, transport=transport)
        self.api_keys = ApiKeysModule(self._client)
        self.plans = PlansModule(self._client)
        self.users = UsersModule(self._client)
        self.validation = ValidationModule(self._client)

    @classmethod
    def from_env(cls, *, transport: httpx.AsyncBaseTransport | None = None) -> Limitly:
        """Build a client from LIMITLY_* environment variables (and .env)."""
        return cls(get_settings().to_client_config(), transport=transport)

    def get_client(self) -> HttpClient:
        """The underlying HttpClient, for debugging and tests."""
        return self._client

    def create_middleware(self, **options: Any):
        """See ``limitly_sdk.tier3_platform.middleware.create_middleware``."""
        return create_middleware(self.validation, **options)

    def with_rate_limit(self, handler: Any = None, **options: Any) -> Any:
        """See ``limitly_sdk.tier3_platform.middleware.with_rate_limit``."""
        return with_rate_limit(self.validation, handler, **options)

    def asgi_middleware(self, app: Any, **options: Any) -> LimitlyASGIMiddleware:
        return LimitlyASGIMiddleware(app, self.validation, **options)

    def __repr__(self) -> str:
        return f"Limitly(base_url={self._client.base_url!r}, api_key={self._client.masked_api_key!r})"


__all__ = ["Limitly"]
