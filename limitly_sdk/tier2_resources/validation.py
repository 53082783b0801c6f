"""
limitly_sdk.tier2_resources.validation
───────────────────────────────────────
Request validation against the caller's plan: ``POST /validate``.
This is the call the gate makes for every inbound request.
"""
from __future__ import annotations

from typing import Any

from limitly_sdk.tier1_runtime.api_client import HttpClient, RequestOptions
from limitly_sdk.tier2_resources.models import ValidateRequestRequest, ValidateRequestResponse


class ValidationModule:
    def __init__(self, client: HttpClient) -> None:
        self._client = client

    async def validate_request(
        self,
        data: ValidateRequestRequest | dict,
        options: RequestOptions | None = None,
    ) -> ValidateRequestResponse:
        return await self._client.post(
            "/validate", data, options, model=ValidateRequestResponse
        )

    async def validate(
        self,
        api_key: str,
        endpoint: str,
        method: str,
        options: RequestOptions | None = None,
    ) -> ValidateRequestResponse:
        """
        Check whether *api_key* may call *endpoint* with *method*.

        Usage:
            result = await limitly.validation.validate(key, "/api/users", "GET")
            if not result.allowed:
                ...  # result.details has current_usage / limit / plan_name
        """
        return await self.validate_request(
            ValidateRequestRequest(api_key=api_key, endpoint=endpoint, method=method),
            options,
        )

    async def validate_with_context(
        self,
        api_key: str,
        endpoint: str,
        method: str,
        context: dict[str, Any] | None = None,
        options: RequestOptions | None = None,
    ) -> ValidateRequestResponse:
        """Like validate(), with extra context (user id, session, ...) for the server."""
        return await self.validate_request(
            ValidateRequestRequest(
                api_key=api_key, endpoint=endpoint, method=method, context=context
            ),
            options,
        )


__all__ = ["ValidationModule"]
