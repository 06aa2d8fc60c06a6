"""Notification and email adapters."""

from event_booking_ms.features.notifications.infrastructure.adapters.console_email_adapter import (
    ConsoleEmailAdapter,
)
from event_booking_ms.features.notifications.infrastructure.adapters.database_notification_adapter import (
    DatabaseNotificationAdapter,
)
from event_booking_ms.features.notifications.infrastructure.adapters.sendgrid_email_adapter import (
    SendGridEmailAdapter,
)

__all__ = ["ConsoleEmailAdapter", "DatabaseNotificationAdapter", "SendGridEmailAdapter"]
