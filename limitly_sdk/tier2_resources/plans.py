"""
limitly_sdk.tier2_resources.plans
──────────────────────────────────
Plan management: ``/plans`` endpoints.
"""
from __future__ import annotations

from limitly_sdk.tier0_core.http import ApiResponse, PaginatedResponse
from limitly_sdk.tier1_runtime.api_client import HttpClient, RequestOptions
from limitly_sdk.tier2_resources.models import (
    CreatePlanRequest,
    DeleteResult,
    Plan,
    PlanKeysResponse,
    PlanUsage,
    PlanUsersResponse,
    PlanWithUsage,
    UpdatePlanRequest,
)


class PlansModule:
    def __init__(self, client: HttpClient) -> None:
        self._client = client

    async def list(self, options: RequestOptions | None = None) -> PaginatedResponse[Plan]:
        return await self._client.get("/plans", options, model=PaginatedResponse[Plan])

    async def create(
        self,
        data: CreatePlanRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[Plan]:
        return await self._client.post("/plans", data, options, model=ApiResponse[Plan])

    async def get(self, plan_id: str, options: RequestOptions | None = None) -> ApiResponse[Plan]:
        return await self._client.get(f"/plans/{plan_id}", options, model=ApiResponse[Plan])

    async def update(
        self,
        plan_id: str,
        data: UpdatePlanRequest | dict,
        options: RequestOptions | None = None,
    ) -> ApiResponse[Plan]:
        return await self._client.put(f"/plans/{plan_id}", data, options, model=ApiResponse[Plan])

    async def delete(
        self, plan_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[DeleteResult] | None:
        return await self._client.delete(
            f"/plans/{plan_id}", options, model=ApiResponse[DeleteResult]
        )

    async def get_usage(
        self, plan_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[PlanUsage]:
        return await self._client.get(
            f"/plans/{plan_id}/usage", options, model=ApiResponse[PlanUsage]
        )

    async def get_users(
        self, plan_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[PlanUsersResponse]:
        return await self._client.get(
            f"/plans/{plan_id}/users", options, model=ApiResponse[PlanUsersResponse]
        )

    async def get_keys(
        self, plan_id: str, options: RequestOptions | None = None
    ) -> ApiResponse[PlanKeysResponse]:
        return await self._client.get(
            f"/plans/{plan_id}/keys", options, model=ApiResponse[PlanKeysResponse]
        )

    async def list_with_usage(
        self, options: RequestOptions | None = None
    ) -> PaginatedResponse[PlanWithUsage]:
        return await self._client.get(
            "/plans/with-usage", options, model=PaginatedResponse[PlanWithUsage]
        )


__all__ = ["PlansModule"]
