"""
Structured logging configuration.

Following Sandi Metz principles:
- Single Responsibility: Logging setup and configuration
- Small functions: Each setup step isolated
- Clear naming: Descriptive function names
"""

import logging
import sys
from typing import Any

import structlog

ROOT_LOGGER = "pray"


def setup_logging(log_level: str = "WARNING") -> None:
    """
    Configure structured logging.

    Logs go to stderr so they never mix with rendered command output.
    Calling again replaces the handler instead of adding another.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=False),
            foreign_pre_chain=shared_processors,
        )
    )

    root = logging.getLogger(ROOT_LOGGER)
    root.handlers = [handler]
    root.setLevel(getattr(logging, log_level.upper()))
    root.propagate = False

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structured logger
    """
    return structlog.get_logger(name)


def log_http_attempt(method: str, url: str, attempt: int, **kwargs: Any) -> None:
    """
    Log a single HTTP attempt.

    Args:
        method: HTTP method
        url: Request URL
        attempt: 1-based attempt number
        **kwargs: Additional context
    """
    logger = get_logger("pray.http")
    logger.debug("http_attempt", method=method, url=url, attempt=attempt, **kwargs)


def log_cache_hit(key: str, kind: str, **kwargs: Any) -> None:
    """
    Log cache hit.

    Args:
        key: Cache key
        kind: Operation kind (times/addr/qibla)
        **kwargs: Additional context
    """
    logger = get_logger("pray.cache")
    logger.debug("cache_hit", key=key, kind=kind, **kwargs)


def log_cache_miss(key: str, kind: str, **kwargs: Any) -> None:
    """
    Log cache miss.

    Args:
        key: Cache key
        kind: Operation kind (times/addr/qibla)
        **kwargs: Additional context
    """
    logger = get_logger("pray.cache")
    logger.debug("cache_miss", key=key, kind=kind, **kwargs)


def log_error(error: Exception, context: str, **kwargs: Any) -> None:
    """
    Log error with context.

    Args:
        error: Exception that occurred
        context: Error context
        **kwargs: Additional context
    """
    logger = get_logger("pray.error")
    logger.error(
        "error_occurred",
        error=str(error),
        error_type=type(error).__name__,
        context=context,
        **kwargs
    )
