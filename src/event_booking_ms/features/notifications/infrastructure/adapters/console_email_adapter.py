"""Console Email Adapter - For development and testing."""

import secrets

from event_booking_ms.features.notifications.application.ports import (
    EmailResult,
    EmailSenderPort,
)
from event_booking_ms.shared.core.logging import get_logger

logger = get_logger(__name__)


class ConsoleEmailAdapter(EmailSenderPort):
    """
    Logs emails instead of sending them.

    Always reports success, like a mail server that accepted the message.
    """

    @property
    def provider_name(self) -> str:
        return "console"

    async def send(self, to: str, subject: str, html: str) -> EmailResult:
        message_id = f"<development-{secrets.token_hex(6)}@event-booking.local>"
        logger.info(
            "Email simulated to=%s subject=%r length=%d message_id=%s",
            to,
            subject,
            len(html),
            message_id,
        )
        return EmailResult(success=True, message_id=message_id)
