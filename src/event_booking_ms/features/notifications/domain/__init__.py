"""Notification domain."""

from event_booking_ms.features.notifications.domain.entities import (
    ADMINS,
    Notification,
    NotificationAudience,
)

__all__ = ["ADMINS", "Notification", "NotificationAudience"]
