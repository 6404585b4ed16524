"""Observability layer - structured logging."""

from syllabus_calendar.observability.logging import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)

__all__ = ["setup_logging", "get_logger", "bind_context", "clear_context"]
