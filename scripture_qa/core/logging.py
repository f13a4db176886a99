"""
Scripture QA Service - Structured Logging Module

structlog is configured once at startup with JSON output; get_logger()
only fetches a bound logger and never reconfigures.

Raw user queries end up in log events (query_processed, query_failed), so a
processor clips the ``query`` field to MAX_LOGGED_QUERY_CHARS.
"""

import logging
import sys
from functools import partial
from typing import Any, Final

import structlog
from structlog.typing import EventDict

MAX_LOGGED_QUERY_CHARS: Final[int] = 200

_configured: bool = False


def add_service_info(
    logger: logging.Logger,  # noqa: ARG001 - Required by structlog interface
    method_name: str,  # noqa: ARG001 - Required by structlog interface
    event_dict: EventDict,
    *,
    service_name: str = "scripture-qa-service",
) -> EventDict:
    """Add service metadata to every log entry.

    Args:
        logger: The logger instance (unused but required by structlog interface)
        method_name: The log method name (unused but required by structlog interface)
        event_dict: The event dictionary to modify
        service_name: Value for the ``service`` key

    Returns:
        Modified event dictionary with service info
    """
    event_dict["service"] = service_name
    return event_dict


def truncate_query(
    logger: logging.Logger,  # noqa: ARG001 - Required by structlog interface
    method_name: str,  # noqa: ARG001 - Required by structlog interface
    event_dict: EventDict,
) -> EventDict:
    """Clip the ``query`` field to MAX_LOGGED_QUERY_CHARS."""
    query = event_dict.get("query")
    if isinstance(query, str) and len(query) > MAX_LOGGED_QUERY_CHARS:
        event_dict["query"] = query[:MAX_LOGGED_QUERY_CHARS] + "..."
    return event_dict


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = True,
    service_name: str = "scripture-qa-service",
) -> None:
    """Configure structlog for the application.

    Must be called exactly once at application startup; repeat calls are no-ops.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Whether to use JSON renderer (True for production)
        service_name: Name stamped on every event
    """
    global _configured

    if _configured:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer: Any
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            partial(add_service_info, service_name=service_name),
            truncate_query,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        structlog BoundLogger instance
    """
    return structlog.get_logger(name)


def reset_logging() -> None:
    """Reset logging configuration for testing."""
    global _configured
    _configured = False
    structlog.reset_defaults()
