"""
limitly_sdk
────────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from limitly_sdk.client import Limitly
from limitly_sdk.tier0_core.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_MS,
    ClientConfig,
    LimitlySettings,
    get_settings,
)
from limitly_sdk.tier0_core.errors import ErrorKind, LimitlyError
from limitly_sdk.tier0_core.http import HTTP, ApiResponse, HttpMethod, PaginatedResponse
from limitly_sdk.tier0_core.logging import configure_logging, get_logger
from limitly_sdk.tier1_runtime.api_client import HttpClient, RequestOptions
from limitly_sdk.tier2_resources.api_keys import ApiKeysModule
from limitly_sdk.tier2_resources.plans import PlansModule
from limitly_sdk.tier2_resources.users import UsersModule
from limitly_sdk.tier2_resources.validation import ValidationModule
from limitly_sdk.tier2_resources.models import (
    ApiKey,
    ApiKeyRequest,
    ApiKeyRequestsResponse,
    ApiKeyUsage,
    ApiKeyWithUsage,
    CreateApiKeyRequest,
    CreatedApiKey,
    CreatePlanRequest,
    CreateUserKeyRequest,
    CreateUserRequest,
    DeleteResult,
    LimitInfo,
    Plan,
    PlanKeysResponse,
    PlanUsage,
    PlanUsersResponse,
    PlanWithUsage,
    UpdateApiKeyRequest,
    UpdatePlanRequest,
    UpdateUserRequest,
    User,
    UserUsage,
    UserWithUsage,
    ValidateRequestRequest,
    ValidateRequestResponse,
    ValidationDetails,
)
from limitly_sdk.tier3_platform.middleware import (
    GateRequest,
    GateResponse,
    LimitlyASGIMiddleware,
    create_middleware,
    extract_api_key,
    with_rate_limit,
)

__version__ = "0.1.0"
__all__ = [
    # client
    "Limitly", "HttpClient", "RequestOptions",
    # config
    "ClientConfig", "LimitlySettings", "get_settings",
    "DEFAULT_BASE_URL", "DEFAULT_TIMEOUT_MS",
    # errors
    "LimitlyError", "ErrorKind",
    # http
    "HTTP", "HttpMethod", "ApiResponse", "PaginatedResponse",
    # logging
    "configure_logging", "get_logger",
    # resources
    "ApiKeysModule", "PlansModule", "UsersModule", "ValidationModule",
    # models
    "ApiKey", "ApiKeyRequest", "ApiKeyRequestsResponse", "ApiKeyUsage", "ApiKeyWithUsage",
    "CreateApiKeyRequest", "CreatedApiKey", "CreatePlanRequest", "CreateUserKeyRequest",
    "CreateUserRequest", "DeleteResult", "LimitInfo", "Plan", "PlanKeysResponse",
    "PlanUsage", "PlanUsersResponse", "PlanWithUsage", "UpdateApiKeyRequest",
    "UpdatePlanRequest", "UpdateUserRequest", "User", "UserUsage", "UserWithUsage",
    "ValidateRequestRequest", "ValidateRequestResponse", "ValidationDetails",
    # gate
    "GateRequest", "GateResponse", "LimitlyASGIMiddleware",
    "create_middleware", "extract_api_key", "with_rate_limit",
]
