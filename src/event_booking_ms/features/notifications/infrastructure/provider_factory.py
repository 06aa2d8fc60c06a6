"""Email sender factory - Dependency injection."""

from functools import lru_cache

from event_booking_ms.features.notifications.application.ports import EmailSenderPort
from event_booking_ms.features.notifications.infrastructure.adapters import (
    ConsoleEmailAdapter,
    SendGridEmailAdapter,
)
from event_booking_ms.shared.core.settings import get_settings


@lru_cache
def get_email_sender() -> EmailSenderPort:
    """
    Get the email sender based on configuration.

    Factory function for dependency injection.
    """
    settings = get_settings()

    match settings.email_provider:
        case "sendgrid":
            return SendGridEmailAdapter()
        case _:
            return ConsoleEmailAdapter()
