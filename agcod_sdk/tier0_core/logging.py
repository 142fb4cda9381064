"""
agcod_sdk.tier0_core.logging
─────────────────────────────
Structured logs with levels, context injection, and redaction of credentials
and request signatures.

Only the ``agcod_sdk`` logger hierarchy is touched. Loggers are wrapped with
their own processor chain, so the host application's structlog configuration
and root handlers stay as they are.

Minimal stack: structlog (stdout JSON or console)
Configure via: AGCOD_LOG_LEVEL, AGCOD_LOG_FORMAT=json|console
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from agcod_sdk.tier0_core.redact import structlog_redact_processor

LOGGER_NAME = "agcod_sdk"


# ── Configuration ─────────────────────────────────────────────────────────────

_processors: list[Any] | None = None
_wrapper_class: type | None = None


def _configure() -> None:
    from agcod_sdk.tier0_core.config import get_settings

    global _processors, _wrapper_class

    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    log_format = settings.log_format.lower()

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog_redact_processor,
    ]

    if log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    sdk_logger = logging.getLogger(LOGGER_NAME)
    if not sdk_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        sdk_logger.addHandler(handler)
    sdk_logger.setLevel(level)

    _processors = shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter]
    _wrapper_class = structlog.make_filtering_bound_logger(level)


# ── Public API ────────────────────────────────────────────────────────────────

def get_logger(name: str | None = None) -> Any:
    """
    Return a structured logger bound to the given name, which should sit
    under ``agcod_sdk`` so the SDK handler picks it up.

    Usage:
        log = get_logger(__name__)
        log.info("agcod.request.sent", action="CreateGiftCard", host="...")
    """
    if _processors is None:
        _configure()
    return structlog.wrap_logger(
        logging.getLogger(name or LOGGER_NAME),
        processors=_processors,
        wrapper_class=_wrapper_class,
        context_class=dict,
    )


__all__ = ["get_logger"]
