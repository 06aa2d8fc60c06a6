"""Shared infrastructure module."""

from event_booking_ms.shared.infrastructure.audit import (
    SYSTEM_CONTEXT,
    AuditContext,
    AuditLogger,
)
from event_booking_ms.shared.infrastructure.database import (
    close_db,
    get_db_session,
    get_session_factory,
    init_db,
)

__all__ = [
    "SYSTEM_CONTEXT",
    "AuditContext",
    "AuditLogger",
    "close_db",
    "get_db_session",
    "get_session_factory",
    "init_db",
]
