"""
Logging setup for the syllabus-calendar service.

The API layer logs through structlog; extraction modules log through
``logging.getLogger(__name__)`` and share the stdlib handler installed
here. Production renders one JSON object per line, development uses the
console renderer.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from syllabus_calendar import __version__
from syllabus_calendar.config.settings import Settings, get_settings

SERVICE_NAME = "syllabus-calendar"

# LLM SDK transports log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "openai", "anthropic")


def add_service_info(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp each event with the service name and version."""
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def _renderers(settings: Settings) -> list[Processor]:
    if settings.is_production:
        return [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def setup_logging(settings: Settings | None = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Safe to call more than once; the CLI calls it again after ``--debug``
    changes the settings.

    Args:
        settings: Settings to read; defaults to the cached instance.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.effective_log_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_info,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        *_renderers(settings),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Structured logger for the API layer."""
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """Attach fields to every event logged in the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
