"""
limitly_sdk.tier0_core.logging
───────────────────────────────
Structured logs for the SDK: request timing from HttpClient and rejection
reasons from the gate.

The SDK never configures structlog on its own. Loggers returned by
get_logger() follow whatever configuration the host application set up.
Applications without their own setup can call configure_logging() once at
startup to get the SDK's JSON/console output with API keys redacted.

Stack: structlog over stdlib logging (stdout, JSON or console)
Configure via: configure_logging(), LIMITLY_LOG_LEVEL, LIMITLY_LOG_FORMAT=json|console
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from limitly_sdk.tier0_core.config import get_settings
from limitly_sdk.tier0_core.redact import structlog_redact_processor


# ── Configuration ─────────────────────────────────────────────────────────────

def configure_logging(level: str | None = None, fmt: str | None = None) -> None:
    """
    Opt-in structlog setup for applications that have none of their own.

    Replaces the process-wide structlog configuration, so call it once from
    application startup, never from library code. *level* and *fmt* default
    to LIMITLY_LOG_LEVEL and LIMITLY_LOG_FORMAT.

    Usage:
        from limitly_sdk import configure_logging
        configure_logging(level="DEBUG", fmt="console")
    """
    if level is None or fmt is None:
        settings = get_settings()
        level = level or settings.log_level
        fmt = fmt or settings.log_format
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog_redact_processor,
    ]

    if fmt == "console":
        render_chain: list[Any] = [structlog.dev.ConsoleRenderer()]
    else:
        render_chain = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *render_chain,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    # Repeated calls replace the handler rather than stacking another one.
    sdk_logger = logging.getLogger("limitly_sdk")
    sdk_logger.handlers = [handler]
    sdk_logger.setLevel(log_level)
    sdk_logger.propagate = False


# ── Public API ────────────────────────────────────────────────────────────────

def get_logger(name: str | None = None) -> Any:
    """
    Return a structured logger bound to the given name.

    Does not touch structlog's configuration; output follows the host's
    setup, or configure_logging() if the host called it.

    Usage:
        log = get_logger(__name__)
        log.debug("limitly.request", method="GET", path="/plans", status_code=200)
    """
    return structlog.get_logger(name or "limitly_sdk")


__all__ = ["configure_logging", "get_logger"]
