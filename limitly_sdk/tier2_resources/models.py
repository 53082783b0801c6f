"""
limitly_sdk.tier2_resources.models
───────────────────────────────────
Pydantic models for Limitly resources. Request models are what callers send;
response models are lenient (unknown fields kept, optional fields default to
None) so a server adding fields never breaks a client.
"""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

KeyStatus = Literal["active", "inactive"]
RequestPeriod = Literal["day", "week", "month", "year"]


class _Resource(BaseModel):
    model_config = ConfigDict(extra="allow")


# ── Plans ─────────────────────────────────────────────────────────────────

class Plan(_Resource):
    id: str
    owner_id: str | None = None
    name: str
    description: str | None = None
    max_requests: int | None = None
    request_period: str | None = None
    is_active: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None


class CreatePlanRequest(BaseModel):
    name: str
    description: str | None = None
    max_requests: int
    request_period: RequestPeriod
    is_active: bool | None = None


class UpdatePlanRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    max_requests: int | None = None
    request_period: RequestPeriod | None = None
    is_active: bool | None = None


class PlanUsage(_Resource):
    plan_id: str | None = None
    plan_name: str | None = None
    max_requests: int | None = None
    request_period: str | None = None
    total_requests: int | None = None
    percentage_used: float | None = None
    users_count: int | None = None
    api_keys_count: int | None = None
    is_unlimited: bool | None = None


# ── Users ─────────────────────────────────────────────────────────────────

class User(_Resource):
    user_id: int
    name: str
    email: str | None = None
    is_disabled: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None
    custom_start: str | None = None
    plan: Plan | None = None


class CreateUserRequest(BaseModel):
    name: str
    email: str | None = None
    plan_id: str | None = None
    custom_start: str | None = None


class UpdateUserRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    is_disabled: bool | None = None
    plan_id: str | None = None
    custom_start: str | None = None


class UserUsage(_Resource):
    type: str = "user"
    current_usage: int | None = None
    limit: int | None = None
    percentage_used: float | None = None
    user_name: str | None = None
    plan_name: str | None = None
    period_start: str | None = None
    period_end: str | None = None
    is_unlimited: bool | None = None


# ── API keys ──────────────────────────────────────────────────────────────

class ApiKey(_Resource):
    id: str
    name: str
    api_key: str | None = None  # only present on create / regenerate
    status: str | None = None
    created_at: str | None = None
    last_used_at: str | None = None
    user_id: int | None = None
    plan_id: str | None = None
    user: User | None = None
    plan: Plan | None = None


class LimitInfo(_Resource):
    can_create: bool | None = None
    current_count: int | None = None
    max_allowed: int | None = None
    remaining_keys: int | None = None
    plan_type: str | None = None


class CreatedApiKey(ApiKey):
    limitInfo: LimitInfo | None = None


class CreateApiKeyRequest(BaseModel):
    name: str
    user_id: int | None = None
    plan_id: str | None = None
    status: KeyStatus | None = None


class UpdateApiKeyRequest(BaseModel):
    name: str | None = None
    user_id: int | None = None
    plan_id: str | None = None
    status: KeyStatus | None = None


class CreateUserKeyRequest(BaseModel):
    name: str
    plan_id: str | None = None
    status: KeyStatus | None = None


class ApiKeyUsage(_Resource):
    apiKeyId: str | None = None
    apiKeyName: str | None = None
    created_at: str | None = None
    periodStart: str | None = None
    periodEnd: str | None = None
    totalRequests: int | None = None
    requestsInPeriod: int | None = None
    percentageUsed: float | None = None
    limit: int | None = None
    planName: str | None = None
    isUnlimited: bool | None = None


class ApiKeyRequest(_Resource):
    api_key_id: str | None = None
    created_at: str | None = None
    endpoint: str | None = None
    method: str | None = None
    status_code: int | None = None
    response_time_ms: float | None = None


class ApiKeyRequestsResponse(_Resource):
    apiKeyId: str | None = None
    apiKeyName: str | None = None
    created_at: str | None = None
    periodStart: str | None = None
    periodEnd: str | None = None
    totalRequests: int | None = None
    requestsInPeriod: int | None = None
    requestsInPeriodDetails: list[ApiKeyRequest] = []


class ApiKeyWithUsage(ApiKey):
    usage: ApiKeyUsage | None = None


class PlanWithUsage(Plan):
    usage: PlanUsage | None = None


class UserWithUsage(User):
    usage: UserUsage | None = None


class PlanUsersResponse(_Resource):
    plan: Plan
    users: list[User] = []


class PlanKeysResponse(_Resource):
    plan: Plan
    api_keys: list[ApiKey] = []


class DeleteResult(_Resource):
    message: str | None = None


# ── Validation ────────────────────────────────────────────────────────────

class ValidateRequestRequest(BaseModel):
    api_key: str
    endpoint: str
    method: str
    context: dict[str, Any] | None = None


class ValidationDetails(_Resource):
    """Typed view of the usage details ``POST /validate`` reports."""

    current_usage: int | float | None = None
    limit: int | float | None = None
    plan_name: str | None = None
    period_start: str | int | float | None = None
    period_end: str | int | float | None = None


class ValidateRequestResponse(_Resource):
    """
    Outcome of ``POST /validate``. ``allowed`` mirrors ``success``.

    ``details`` is kept as the raw mapping so the gate can echo it to clients
    unchanged; ``typed_details()`` parses it on demand.
    """

    success: bool = False
    message: str | None = None
    error: str | None = None
    details: dict[str, Any] | None = None

    @property
    def allowed(self) -> bool:
        return self.success

    def details_dict(self) -> dict[str, Any] | None:
        """Details exactly as the server sent them, for echoing to clients."""
        return self.details

    def typed_details(self) -> ValidationDetails | None:
        if self.details is None:
            return None
        return ValidationDetails.model_validate(self.details)


__all__ = [
    "Plan", "CreatePlanRequest", "UpdatePlanRequest", "PlanUsage", "PlanWithUsage",
    "PlanUsersResponse", "PlanKeysResponse",
    "User", "CreateUserRequest", "UpdateUserRequest", "UserUsage", "UserWithUsage",
    "ApiKey", "CreatedApiKey", "CreateApiKeyRequest", "UpdateApiKeyRequest",
    "CreateUserKeyRequest", "ApiKeyUsage", "ApiKeyRequest", "ApiKeyRequestsResponse",
    "ApiKeyWithUsage", "LimitInfo", "DeleteResult",
    "ValidateRequestRequest", "ValidationDetails", "ValidateRequestResponse",
]
