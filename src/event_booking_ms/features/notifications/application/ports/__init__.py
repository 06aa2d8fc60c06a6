"""Notification application ports."""

from event_booking_ms.features.notifications.application.ports.email_sender_port import (
    EmailResult,
    EmailSenderPort,
)
from event_booking_ms.features.notifications.application.ports.notification_port import (
    NotificationPort,
)

__all__ = ["EmailResult", "EmailSenderPort", "NotificationPort"]
