"""Side-effect intents and their dispatcher.

Use cases return intents instead of calling collaborators directly. The
dispatcher runs them after the transaction has committed, usually as a
FastAPI background task. Each intent is attempted once; a failure is
logged and never propagates.
"""

from dataclasses import dataclass, field
from typing import Any, Sequence, Union
from uuid import UUID

from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.notifications.application.email_templates import (
    BOOKING_CONFIRMATION_SUBJECT,
    PAYMENT_RECEIPT_SUBJECT,
    booking_confirmation_html,
    payment_receipt_html,
)
from event_booking_ms.features.notifications.application.ports import (
    EmailSenderPort,
    NotificationPort,
)
from event_booking_ms.features.notifications.domain.entities import ADMINS
from event_booking_ms.features.payments.domain.entities import Payment
from event_booking_ms.shared.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class NotifyUser:
    user_id: UUID
    kind: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NotifyAdmins:
    kind: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SendPaymentReceipt:
    payment: Payment
    booking: Booking


@dataclass(frozen=True)
class SendBookingConfirmation:
    booking: Booking


SideEffect = Union[NotifyUser, NotifyAdmins, SendPaymentReceipt, SendBookingConfirmation]


def notify_booking_owner(
    booking: Booking, kind: str, message: str, data: dict[str, Any]
) -> list[SideEffect]:
    """Owner notification, or nothing for guest bookings."""
    if booking.user_id is None:
        return []
    return [NotifyUser(booking.user_id, kind, message, data)]


class SideEffectDispatcher:
    """Executes side-effect intents against the notifier and email sender."""

    def __init__(self, notifier: NotificationPort, email_sender: EmailSenderPort) -> None:
        self._notifier = notifier
        self._email_sender = email_sender

    async def dispatch(self, effects: Sequence[SideEffect]) -> None:
        for effect in effects:
            try:
                await self._run(effect)
            except Exception:
                logger.exception("Side effect %s failed", type(effect).__name__)

    async def _run(self, effect: SideEffect) -> None:
        match effect:
            case NotifyUser():
                await self._notifier.notify(
                    effect.user_id, effect.kind, effect.message, effect.data
                )
            case NotifyAdmins():
                await self._notifier.notify(ADMINS, effect.kind, effect.message, effect.data)
            case SendPaymentReceipt():
                await self._send_email(
                    effect.booking.customer_email,
                    PAYMENT_RECEIPT_SUBJECT,
                    payment_receipt_html(effect.payment, effect.booking),
                )
            case SendBookingConfirmation():
                await self._send_email(
                    effect.booking.customer_email,
                    BOOKING_CONFIRMATION_SUBJECT,
                    booking_confirmation_html(effect.booking),
                )
            case _:
                logger.warning("Unknown side effect %r ignored", effect)

    async def _send_email(self, to: str, subject: str, html: str) -> None:
        result = await self._email_sender.send(to, subject, html)
        if result.success:
            logger.info("%s email processed for %s", subject, to)
        else:
            logger.error("Failed to send %s email to %s: %s", subject, to, result.error)
