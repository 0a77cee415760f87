"""
Structured logging configuration for the game engine.
"""
import logging
import sys

import structlog


def configure_logging(environment: str = "development", cache: bool = True):
    """Configure structured logging based on environment.

    Args:
        environment: "production" renders JSON at INFO; anything else renders
            to the console at DEBUG.
        cache: Whether loggers freeze their configuration on first use.
    """

    level = logging.INFO if environment == "production" else logging.DEBUG

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    if environment == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=cache,
    )

    return get_logger("engine")


def get_logger(name: str = None):
    """Get a lazy logger, bound to a component name if given."""
    if name:
        return structlog.get_logger(component=name)
    return structlog.get_logger()
