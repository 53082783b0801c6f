"""
limitly_sdk.tier2_resources.users
──────────────────────────────────
End-user management: ``/users`` endpoints, including per-user API keys.
User IDs are integers on the Limitly side.
"""
from __future__ import annotations

from limitly_sdk.tier0_core.http import ApiResponse, PaginatedResponse
from limitly_sdk.tier1_runtime.api_client import HttpClient, RequestOptions
from limitly_sdk.tier2_resources.models import (
    ApiKey,
    CreateUserKeyRequest,
    CreateUserRequest,
    DeleteResult,
    UpdateUserRequest,
    User,
    UserUsage,
    UserWithUsage,
)


class UsersModule:
    def __init__(self, client: HttpClient) -> None:
        self._client = client

    async def list(self, options: RequestOptions | None = None) -> PaginatedResponse[User]:
        return await self._client.get("/users", options, model=PaginatedResponse[User])

    async def create(
        self,
        data: CreateUserRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[User]:
        return await self._client.post("/users", data, options, model=ApiResponse[User])

    async def get(self, user_id: int, options: RequestOptions | None = None) -> ApiResponse[User]:
        return await self._client.get(f"/users/{user_id}", options, model=ApiResponse[User])

    async def update(
        self,
        user_id: int,
        data: UpdateUserRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[User]:
        return await self._client.put(f"/users/{user_id}", data, options, model=ApiResponse[User])

    async def delete(
        self, user_id: int, options: RequestOptions | None = None
    ) -> ApiResponse[DeleteResult] | None:
        return await self._client.delete(
            f"/users/{user_id}", options, model=ApiResponse[DeleteResult]
        )

    async def get_usage(
        self, user_id: int, options: RequestOptions | None = None
    ) -> ApiResponse[UserUsage]:
        return await self._client.get(
            f"/users/{user_id}/usage", options, model=ApiResponse[UserUsage]
        )

    async def get_keys(
        self, user_id: int, options: RequestOptions | None = None
    ) -> ApiResponse[list[ApiKey]]:
        return await self._client.get(
            f"/users/{user_id}/keys", options, model=ApiResponse[list[ApiKey]]
        )

    async def create_key(
        self,
        user_id: int,
        data: CreateUserKeyRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[ApiKey]:
        return await self._client.post(
            f"/users/{user_id}/keys", data, options, model=ApiResponse[ApiKey]
        )

    async def list_with_usage(
        self, options: RequestOptions | None = None
    ) -> PaginatedResponse[UserWithUsage]:
        return await self._client.get(
            "/users/with-usage", options, model=PaginatedResponse[UserWithUsage]
        )


__all__ = ["UsersModule"]
