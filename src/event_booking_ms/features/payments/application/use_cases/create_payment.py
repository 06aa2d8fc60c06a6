"""Payment use case - Create payment."""

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.bookings.infrastructure.repository import (
    BookingRepository,
)
from event_booking_ms.features.notifications.application.side_effects import (
    NotifyAdmins,
    SideEffect,
)
from event_booking_ms.features.payments.domain.entities import Payment
from event_booking_ms.features.payments.domain.enums import PaymentMethod
from event_booking_ms.features.payments.infrastructure.repository import (
    PaymentRepository,
)
from event_booking_ms.shared.core.logging import get_logger
from event_booking_ms.shared.domain.exceptions import (
    BookingAlreadyPaidError,
    BookingNotFoundError,
)
from event_booking_ms.shared.infrastructure.audit import (
    SYSTEM_CONTEXT,
    AuditContext,
    AuditLogger,
)

logger = get_logger(__name__)


@dataclass
class CreatePaymentRequest:
    """Request to start paying for a booking."""

    booking_id: UUID
    payment_method: PaymentMethod
    phone_number: str | None = None
    audit_context: AuditContext = SYSTEM_CONTEXT


@dataclass
class CreatePaymentResponse:
    """Response from creating a payment."""

    payment: Payment
    side_effects: list[SideEffect] = field(default_factory=list)


class CreatePaymentUseCase:
    """
    Use case for creating a payment against a booking.

    Only an unpaid booking can get a payment. The booking moves to
    ``processing`` and the payment row is inserted in one transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._bookings = BookingRepository(session)
        self._payments = PaymentRepository(session)
        self._audit = AuditLogger(session)

    async def execute(self, request: CreatePaymentRequest) -> CreatePaymentResponse:
        """
        Create a new payment.

        1. Check the booking exists and is unpaid
        2. Claim the booking (unpaid -> processing), guarded in the UPDATE
        3. Insert the payment in PENDING status with a fresh transaction id
        4. After commit, ask for an admin notification
        """
        async with self._session.begin():
            booking = await self._bookings.get_by_id(request.booking_id, for_update=True)
            if booking is None:
                raise BookingNotFoundError(request.booking_id)

            if not booking.can_start_payment():
                raise BookingAlreadyPaidError(booking.id, booking.payment_status.value)

            if not await self._bookings.claim_payment(booking.id):
                # Lost a race with another request for the same booking
                current = await self._bookings.get_by_id(booking.id)
                raise BookingAlreadyPaidError(
                    booking.id,
                    current.payment_status.value if current else "unknown",
                )

            payment = await self._payments.create(
                Payment.create(
                    booking_id=booking.id,
                    amount=booking.price_calculated,
                    payment_method=request.payment_method,
                    phone_number=request.phone_number,
                )
            )

            await self._audit.record(
                "create_payment",
                "payment",
                payment.id,
                request.audit_context,
                {
                    "bookingId": str(booking.id),
                    "amount": payment.amount,
                    "paymentMethod": payment.payment_method.value,
                },
            )

        logger.info(
            "Payment %s created for booking %s (%s ETB via %s)",
            payment.id,
            booking.id,
            payment.amount,
            payment.payment_method.value,
        )

        return CreatePaymentResponse(
            payment=payment,
            side_effects=[
                NotifyAdmins(
                    "payment_created",
                    f"New payment created for booking {booking.id}",
                    {
                        "bookingId": str(booking.id),
                        "paymentId": str(payment.id),
                        "amount": payment.amount,
                    },
                )
            ],
        )
