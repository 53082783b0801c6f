"""
limitly_sdk test configuration.

No test talks to the real Limitly API: HTTP goes through httpx.MockTransport
and the gate tests use a stub validation module.
"""
from __future__ import annotations

import os
from typing import Any, Callable

import httpx
import pytest

# ── Env defaults ───────────────────────────────────────────────────────────
# These must be set before any limitly_sdk modules are imported.

os.environ.setdefault("LIMITLY_LOG_LEVEL", "WARNING")
os.environ.setdefault("LIMITLY_LOG_FORMAT", "console")

BASE_URL = "http://limitly.test/v1"
API_KEY = "lim_test_owner_key_123"


# ── HTTP recording ─────────────────────────────────────────────────────────

class Recorder:
    """MockTransport handler that records every request it sees."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client():
    """Return a factory: make_client(responder, **config) -> (HttpClient, Recorder)."""
    from limitly_sdk.tier0_core.config import ClientConfig
    from limitly_sdk.tier1_runtime.api_client import HttpClient

    def _make(responder: Callable[[httpx.Request], httpx.Response], **config: Any):
        recorder = Recorder(responder)
        settings = {"api_key": API_KEY, "base_url": BASE_URL, **config}
        client = HttpClient(ClientConfig(**settings), transport=httpx.MockTransport(recorder))
        return client, recorder

    return _make


@pytest.fixture
def make_limitly():
    """Return a factory: make_limitly(responder) -> (Limitly, Recorder)."""
    from limitly_sdk.client import Limitly

    def _make(responder: Callable[[httpx.Request], httpx.Response]):
        recorder = Recorder(responder)
        limitly = Limitly(
            api_key=API_KEY,
            base_url=BASE_URL,
            transport=httpx.MockTransport(recorder),
        )
        return limitly, recorder

    return _make


# ── Gate stubs ─────────────────────────────────────────────────────────────

class StubValidation:
    """Stands in for ValidationModule; records calls, returns a fixed outcome."""

    def __init__(self, outcome: Any = None, error: BaseException | None = None) -> None:
        self.outcome = outcome
        self.error = error
        self.calls: list[tuple[str, str, str]] = []

    async def validate(self, api_key: str, endpoint: str, method: str, options: Any = None):
        self.calls.append((api_key, endpoint, method))
        if self.error is not None:
            raise self.error
        return self.outcome


@pytest.fixture
def stub_validation():
    """Return a factory: stub_validation(allowed=True, details=None, error=None)."""
    from limitly_sdk.tier2_resources.models import ValidateRequestResponse

    def _make(allowed: bool = True, details: dict | None = None, error: BaseException | None = None):
        payload: dict[str, Any] = {"success": allowed}
        if details is not None:
            payload["details"] = details
        return StubValidation(ValidateRequestResponse.model_validate(payload), error)

    return _make


@pytest.fixture(autouse=True)
def reset_settings():
    """Each test sees a fresh settings cache."""
    from limitly_sdk.tier0_core.config import _reset_settings

    _reset_settings()
    yield
    _reset_settings()
