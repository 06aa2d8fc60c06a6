"""Audit infrastructure module."""

from event_booking_ms.shared.infrastructure.audit.audit_logger import (
    SYSTEM_CONTEXT,
    AuditContext,
    AuditLogger,
)

__all__ = ["AuditContext", "AuditLogger", "SYSTEM_CONTEXT"]
