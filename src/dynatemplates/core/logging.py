"""Structured logging with correlation IDs.

This module configures structlog for structured JSON logging. Render calls
bind their operation and template name to the logging context so every
provider failure can be traced back to the record that produced it.
"""

import logging
import sys
import uuid
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from dynatemplates.core.config import get_settings


def add_correlation_id(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add a correlation ID to the log entry if none is bound.

    Args:
        logger: Logger instance (unused).
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Modified event dictionary with correlation_id.
    """
    if "correlation_id" not in event_dict:
        event_dict["correlation_id"] = f"cid_{uuid.uuid4().hex[:12]}"
    return event_dict


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log entry.

    Args:
        logger: Logger instance.
        method_name: Method name (unused).
        event_dict: Event dictionary to modify.

    Returns:
        EventDict: Modified event dictionary with logger name.
    """
    event_dict["logger"] = logger.name if hasattr(logger, "name") else "dynatemplates"
    return event_dict


def rename_message_field(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' field to 'message' for compatibility."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def configure_logging(settings: Any | None = None) -> None:
    """Configure structured logging for the application.

    Sets up structlog with JSON formatting for production and
    console formatting for development.

    Args:
        settings: Optional settings instance. If not provided, will load from environment.
    """
    if settings is None:
        settings = get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_correlation_id,
        rename_message_field,
    ]

    level = getattr(logging, settings.log_level)

    if settings.is_development or settings.log_format == "console":
        renderer: Processor = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
        cache_logger = False
    else:
        renderer = structlog.processors.JSONRenderer()
        cache_logger = True

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=cache_logger,
    )

    # Configure standard logging for third-party libraries
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        logging.getLogger(logger_name).setLevel(level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Optional logger name. If not provided, uses 'dynatemplates'.

    Returns:
        BoundLogger: Configured structured logger instance.
    """
    return structlog.get_logger(name or "dynatemplates")


class LoggingContext:
    """Context manager for adding logging context.

    Example:
        with LoggingContext(operation="template rendering", template_name="welcome"):
            logger.info("Rendering")  # Will include operation and template_name
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize logging context with key-value pairs.

        Args:
            **kwargs: Key-value pairs to add to logging context.
        """
        self.context = {key: value for key, value in kwargs.items() if value is not None}
        self.tokens: dict[str, Any] | None = None

    def __enter__(self) -> "LoggingContext":
        """Enter the context and add context variables."""
        self.tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit the context and restore the previous context variables."""
        if self.tokens is not None:
            structlog.contextvars.reset_contextvars(**self.tokens)


def bind_correlation_id(correlation_id: str) -> None:
    """Bind a correlation ID to the current logging context.

    Args:
        correlation_id: The correlation ID to bind to the context.
    """
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    """Clear all context variables from the current logging context."""
    structlog.contextvars.clear_contextvars()
