"""Booking use case - Admin status update."""

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.bookings.domain.enums import BookingStatus
from event_booking_ms.features.bookings.infrastructure.repository import (
    BookingRepository,
)
from event_booking_ms.features.notifications.application.side_effects import (
    SideEffect,
    notify_booking_owner,
)
from event_booking_ms.shared.core.logging import get_logger
from event_booking_ms.shared.domain.exceptions import (
    BookingNotFoundError,
    BookingStatusConflictError,
    ValidationFailedError,
)
from event_booking_ms.shared.infrastructure.audit import (
    SYSTEM_CONTEXT,
    AuditContext,
    AuditLogger,
)

logger = get_logger(__name__)

# Statuses that normally follow a settled payment
PAID_STATUSES = frozenset({BookingStatus.CONFIRMED, BookingStatus.COMPLETED})

# Statuses the booking owner is told about
OWNER_NOTIFIED_STATUSES = frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED})


@dataclass
class UpdateBookingStatusResponse:
    booking: Booking
    previous_status: BookingStatus
    side_effects: list[SideEffect] = field(default_factory=list)


def parse_booking_status(value: str | BookingStatus) -> BookingStatus:
    """Lifecycle status from its wire value."""
    try:
        return BookingStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in BookingStatus)
        raise ValidationFailedError(
            "Invalid booking status",
            [{"field": "status", "message": f"Must be one of: {allowed}"}],
        ) from None


class UpdateBookingStatusUseCase:
    """
    Use case for an administrator overwriting a booking's lifecycle status.

    Payment status is left alone. With ``enforce_payment_on_confirm`` an
    unpaid booking cannot be confirmed or completed.
    """

    def __init__(self, session: AsyncSession, enforce_payment_on_confirm: bool = False) -> None:
        self._session = session
        self._enforce_payment_on_confirm = enforce_payment_on_confirm
        self._bookings = BookingRepository(session)
        self._audit = AuditLogger(session)

    async def execute(
        self,
        booking_id: UUID,
        new_status: str | BookingStatus,
        audit_context: AuditContext = SYSTEM_CONTEXT,
    ) -> UpdateBookingStatusResponse:
        status = parse_booking_status(new_status)

        async with self._session.begin():
            booking = await self._bookings.get_by_id(booking_id, for_update=True)
            if booking is None:
                raise BookingNotFoundError(booking_id)

            if status in PAID_STATUSES and not booking.is_paid():
                if self._enforce_payment_on_confirm:
                    raise BookingStatusConflictError(
                        booking.id, status.value, booking.payment_status.value
                    )
                logger.warning(
                    "Booking %s set to %s while payment is %s",
                    booking.id,
                    status.value,
                    booking.payment_status.value,
                )

            previous_status = booking.status
            updated = await self._bookings.update_status(booking.id, status)

            await self._audit.record(
                "update_booking_status",
                "booking",
                booking.id,
                audit_context,
                {
                    "oldStatus": previous_status.value,
                    "newStatus": status.value,
                    "paymentStatus": booking.payment_status.value,
                },
            )

        side_effects: list[SideEffect] = []
        if status in OWNER_NOTIFIED_STATUSES:
            side_effects = notify_booking_owner(
                updated,
                f"booking_{status.value}",
                f"Your booking has been {status.value}",
                {"bookingId": str(updated.id), "status": status.value},
            )

        return UpdateBookingStatusResponse(
            booking=updated, previous_status=previous_status, side_effects=side_effects
        )
