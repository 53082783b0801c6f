"""
limitly_sdk.tier0_core.config
──────────────────────────────
Client configuration. ``ClientConfig`` is the explicit, immutable value every
HttpClient is built from; defaults are applied once, at construction.

``LimitlySettings`` is the optional env layer (.env → environment variables)
used by ``Limitly.from_env()`` and the logging setup. Nothing else in the SDK
reads the environment.

Configure via: LIMITLY_API_KEY, LIMITLY_BASE_URL, LIMITLY_TIMEOUT_MS,
               LIMITLY_LOG_LEVEL, LIMITLY_LOG_FORMAT=json|console
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://xfkyofkqbukqtxcuapvf.supabase.co/functions/v1"
DEFAULT_TIMEOUT_MS = 30_000


class ClientConfig(BaseModel):
    """
    Immutable configuration for one Limitly client.

    ``cache`` and ``revalidate`` are hints for a caller-side fetch cache;
    they are accepted and carried but the SDK never acts on them.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: int = DEFAULT_TIMEOUT_MS  # milliseconds
    headers: dict[str, str] = Field(default_factory=dict)
    cache: bool | None = None
    revalidate: int | None = None

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        if not v:
            raise ValueError("api_key must be a non-empty string")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"timeout must be a positive number of milliseconds, got {v}")
        return v


class LimitlySettings(BaseSettings):
    """Environment-backed settings. All env vars are prefixed with LIMITLY_."""

    model_config = SettingsConfigDict(
        env_prefix="LIMITLY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Client ────────────────────────────────────────────────────────────────
    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"json", "console"}
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got {v!r}")
        return v.lower()

    def to_client_config(self) -> ClientConfig:
        """Build a ClientConfig; raises ValueError if LIMITLY_API_KEY is unset."""
        if not self.api_key:
            raise ValueError("LIMITLY_API_KEY is not set")
        return ClientConfig(
            api_key=self.api_key,
            base_url=self.base_url,
            timeout=self.timeout_ms,
        )


@lru_cache(maxsize=1)
def get_settings() -> LimitlySettings:
    """
    Return the singleton settings. Cached after first call.
    Call _reset_settings() in tests to pick up new env vars.
    """
    return LimitlySettings()


def _reset_settings() -> None:
    """For tests — clear the settings cache."""
    get_settings.cache_clear()


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT_MS",
    "ClientConfig",
    "LimitlySettings",
    "get_settings",
]
