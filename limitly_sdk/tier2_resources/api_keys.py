"""
limitly_sdk.tier2_resources.api_keys
─────────────────────────────────────
API key management: ``/keys`` endpoints.
"""
from __future__ import annotations

from limitly_sdk.tier0_core.http import ApiResponse, PaginatedResponse
from limitly_sdk.tier1_runtime.api_client import HttpClient, RequestOptions
from limitly_sdk.tier2_resources.models import (
    ApiKey,
    ApiKeyRequestsResponse,
    ApiKeyUsage,
    ApiKeyWithUsage,
    CreateApiKeyRequest,
    CreatedApiKey,
    DeleteResult,
    UpdateApiKeyRequest,
)


class ApiKeysModule:
    """
    Usage::

        keys = await limitly.api_keys.list()
        created = await limitly.api_keys.create(CreateApiKeyRequest(name="CI", user_id=42))
        print(created.data.api_key)  # only returned on create / regenerate
    """

    def __init__(self, client: HttpClient) -> None:
        self._client = client

    async def list(self, options: RequestOptions | None = None) -> PaginatedResponse[ApiKey]:
        return await self._client.get("/keys", options, model=PaginatedResponse[ApiKey])

    async def create(
        self,
        data: CreateApiKeyRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[CreatedApiKey]:
        return await self._client.post("/keys", data, options, model=ApiResponse[CreatedApiKey])

    async def get(self, key_id: str, options: RequestOptions | None = None) -> ApiResponse[ApiKey]:
        return await self._client.get(f"/keys/{key_id}", options, model=ApiResponse[ApiKey])

    async def update(
        self,
        key_id: str,
        data: UpdateApiKeyRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[ApiKey]:
        return await self._client.put(f"/keys/{key_id}", data, options, model=ApiResponse[ApiKey])

    async def delete(
        self, key_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[DeleteResult] | None:
        """Soft-delete a key."""
        return await self._client.delete(
            f"/keys/{key_id}", options, model=ApiResponse[DeleteResult]
        )

    async def regenerate(
        self, key_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[ApiKey]:
        return await self._client.post(
            f"/keys/{key_id}/regenerate", None, options, model=ApiResponse[ApiKey]
        )

    async def get_usage(
        self, key_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[ApiKeyUsage]:
        return await self._client.get(
            f"/keys/{key_id}/usage", options, model=ApiResponse[ApiKeyUsage]
        )

    async def get_requests(
        self, key_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[ApiKeyRequestsResponse]:
        return await self._client.get(
            f"/keys/{key_id}/requests", options, model=ApiResponse[ApiKeyRequestsResponse]
        )

    async def list_with_usage(
        self, options: RequestOptions | None = None
    ) -> PaginatedResponse[ApiKeyWithUsage]:
        return await self._client.get(
            "/keys/with-usage", options, model=PaginatedResponse[ApiKeyWithUsage]
        )


__all__ = ["ApiKeysModule"]
