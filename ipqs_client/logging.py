"""Structured logging setup."""

import logging
import sys

import structlog


def setup_logging(level: str = "INFO", json_format: bool = False) -> structlog.BoundLogger:
    """
    Setup structured logging with structlog.

    The library only emits events through `structlog.get_logger()`; calling
    this is left to applications (the CLI does).

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: If True, output JSON logs; otherwise, console format

    Returns:
        Configured logger instance
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger().bind(service="ipqs")


def mask_api_key(text: str, api_key: str) -> str:
    """Replace the API key in URLs/messages before they are logged."""
    if not api_key:
        return text
    return text.replace(api_key, "***")
