"""
limitly_sdk.tier0_core.redact
──────────────────────────────
Credential redaction. Every Limitly call carries an API key, so the logging
pipeline passes through here to keep keys and bearer tokens out of log
output.
"""
from __future__ import annotations

import re
from typing import Any

# ── Default redacted key names (case-insensitive) ─────────────────────────

_SENSITIVE_KEYS: frozenset[str] = frozenset({
    "api_key", "apikey", "x-api-key", "authorization", "token",
    "access_token", "secret", "password", "credential",
})

# ── Regex patterns for inline scrubbing ───────────────────────────────────

_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"Bearer\s+[A-Za-z0-9\-._~+/]+=*", re.I), "Bearer [REDACTED]"),
    (re.compile(r"(api[_-]?key|token)\s*=\s*[^\s&\"']+", re.I), r"\1=[REDACTED]"),
]

REDACTED = "[REDACTED]"


# ── Public API ─────────────────────────────────────────────────────────────

def mask_api_key(api_key: str, visible: int = 8) -> str:
    """Show only the first *visible* characters of a key, e.g. ``lim_abcd...``."""
    return api_key[:visible] + "..."


def redact_dict(
    data: dict[str, Any],
    sensitive_keys: frozenset[str] | None = None,
    *,
    deep: bool = True,
) -> dict[str, Any]:
    """
    Return a copy of *data* with sensitive key values replaced by REDACTED
    and bearer tokens scrubbed from string values.
    If *deep* is True, recurse into nested dicts and lists.
    """
    keys = sensitive_keys if sensitive_keys is not None else _SENSITIVE_KEYS
    result: dict[str, Any] = {}
    for k, v in data.items():
        if isinstance(k, str) and k.lower() in keys:
            result[k] = REDACTED
        elif isinstance(v, str):
            result[k] = scrub_string(v)
        elif deep and isinstance(v, dict):
            result[k] = redact_dict(v, keys, deep=True)
        elif deep and isinstance(v, list):
            result[k] = [
                redact_dict(item, keys, deep=True) if isinstance(item, dict)
                else scrub_string(item) if isinstance(item, str)
                else item
                for item in v
            ]
        else:
            result[k] = v
    return result


def scrub_string(text: str) -> str:
    """Apply regex-based scrubbing to an arbitrary string."""
    for pattern, replacement in _PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def structlog_redact_processor(
    logger: Any,
    method: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog processor; add before any rendering step."""
    return redact_dict(event_dict)


__all__ = [
    "REDACTED",
    "mask_api_key",
    "redact_dict",
    "scrub_string",
    "structlog_redact_processor",
]
