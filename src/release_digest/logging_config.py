"""structlog setup for the release-digest command.

stdout carries the digest, which is usually piped into a chat poster, so
log events are written to stderr. ENVIRONMENT picks the renderer
("production" emits one JSON object per event, anything else the console
renderer) and LOG_LEVEL the threshold; per-record rejections are only
visible at DEBUG.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

PRODUCTION = "production"


def _renderer(environment: str) -> Any:
    if environment == PRODUCTION:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _resolve_level(log_level: str | None) -> int:
    name = (log_level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(
    environment: str | None = None,
    log_level: str | None = None,
) -> None:
    """Route structlog and stdlib logging to stderr.

    Args:
        environment: Overrides the ENVIRONMENT env var
        log_level: Overrides the LOG_LEVEL env var; unknown names mean INFO
    """
    env = environment or os.environ.get("ENVIRONMENT", "development")
    level = _resolve_level(log_level)

    # Loggers are rebuilt on every call so a swapped stderr is picked up.
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _renderer(env),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)
