from __future__ import annotations

import logging
import os
from typing import Any

import structlog

SERVICE_NAME = "pinmap"


def _resolve_level(level: str | None) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def _resolve_format(log_format: str | None, app_env: str | None) -> str:
    if log_format:
        return log_format.lower()
    if "LOG_FORMAT" in os.environ:
        return os.environ["LOG_FORMAT"].lower()
    # Human-readable lines for local development, JSON everywhere else
    return "console" if (app_env or os.getenv("APP_ENV")) == "dev" else "json"


def _add_service(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_logging(
    *,
    level: str | None = None,
    log_format: str | None = None,
    app_env: str | None = None,
) -> None:
    """Configure structlog for JSON structured logging.

    - JSON lines with ISO/UTC timestamp, level, service, event and bound fields
    - Includes contextvars so request_id flows into store and catalog logs
    - Formats exception info in JSON if exc_info is attached
    - stdlib/uvicorn records go through the same renderer
    """

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        _add_service,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if _resolve_format(log_format, app_env) == "console":
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

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logging.basicConfig(level=_resolve_level(level), handlers=[handler], force=True)


def get_logger(*args: Any, **kwargs: Any) -> structlog.stdlib.BoundLogger:  # convenience
    return structlog.get_logger(*args, **kwargs)
