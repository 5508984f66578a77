"""Structured logging configuration using structlog."""

import logging
import sys

import structlog
from structlog.typing import EventDict, Processor

from src.core.config import get_settings

settings = get_settings()

REDACTED_WEBHOOK = "<webhook>"


def add_app_context(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application context to log entries."""
    event_dict["app"] = settings.app_name
    event_dict["env"] = settings.app_env
    return event_dict


def redact_webhook_url(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask the webhook URL, which embeds its token, in string values.

    httpx error messages quote the request URL verbatim.
    """
    secret = settings.discord_webhook_url
    if not secret:
        return event_dict
    for key, value in event_dict.items():
        if isinstance(value, str) and secret in value:
            event_dict[key] = value.replace(secret, REDACTED_WEBHOOK)
    return event_dict


def setup_logging() -> None:
    """Configure structured logging for the notifier."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        redact_webhook_url,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.debug:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        # Cloud log sinks expect one JSON object per line
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]

    structlog.configure(
        processors=processors,  # type: ignore
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


setup_logging()
