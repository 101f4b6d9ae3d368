"""
Logging setup.

Structured logging over the standard library: application services and the
HTTP layer log key/value events through structlog, infrastructure modules log
through plain ``logging`` loggers, and both end up on the same handler.
"""

import contextvars
import logging
import sys
import uuid
from typing import Any

import structlog

from .config import Settings, get_settings

correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)
actor_ref_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "actor_ref", default=""
)


class CorrelationIdProcessor:
    """Structlog processor to add correlation ID and actor to all log entries."""

    def __call__(
        self, logger: Any, name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        correlation_id = correlation_id_var.get("")
        actor_ref = actor_ref_var.get("")

        if correlation_id:
            event_dict["correlation_id"] = correlation_id
        if actor_ref:
            event_dict.setdefault("actor_ref", actor_ref)

        return event_dict


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structured logging with JSON or console output."""
    settings = settings or get_settings()
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        CorrelationIdProcessor(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    if settings.LOG_SQL:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
    else:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set correlation ID for request tracking."""
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    correlation_id_var.set(correlation_id)
    return correlation_id


def set_actor_ref(actor_ref: str) -> None:
    """Set the acting user or system for request tracking."""
    actor_ref_var.set(actor_ref)
