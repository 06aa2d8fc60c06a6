"""Logging setup with correlation ID support.

Usage:
    from event_booking_ms.shared.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Payment %s completed", payment_id)

The correlation ID is set per request by ``CorrelationIdMiddleware`` and is
prefixed to every record emitted through a logger obtained here.
"""

import logging
import sys
import uuid
from contextvars import ContextVar

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation ID for the current context, generating one if missing."""
    cid = correlation_id or str(uuid.uuid4())
    _correlation_id.set(cid)
    return cid


def get_correlation_id() -> str | None:
    """Get the current correlation ID."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    """Clear the correlation ID context."""
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Logging filter that adds correlation_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


class CorrelationIdFormatter(logging.Formatter):
    """Formatter that prefixes records with their correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or "-"
        return f"[{record.correlation_id}] {super().format(record)}"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the package logger."""
    package_logger = logging.getLogger("event_booking_ms")
    package_logger.setLevel(level.upper())

    if any(getattr(h, "_event_booking", False) for h in package_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CorrelationIdFormatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())
    handler._event_booking = True  # type: ignore[attr-defined]
    package_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with correlation ID support."""
    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())
    return logger
