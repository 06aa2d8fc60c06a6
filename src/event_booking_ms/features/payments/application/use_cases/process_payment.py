"""Payment use case - Settle a pending payment."""

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.bookings.infrastructure.repository import (
    BookingRepository,
)
from event_booking_ms.features.notifications.application.side_effects import (
    SendPaymentReceipt,
    SideEffect,
    notify_booking_owner,
)
from event_booking_ms.features.payments.application.ports import QRCodeGeneratorPort
from event_booking_ms.features.payments.domain.entities import Payment
from event_booking_ms.features.payments.domain.enums import PaymentStatus
from event_booking_ms.features.payments.infrastructure.repository import (
    PaymentRepository,
)
from event_booking_ms.shared.core.logging import get_logger
from event_booking_ms.shared.domain.exceptions import (
    BookingNotFoundError,
    PaymentAlreadyProcessedError,
    PaymentNotFoundError,
)
from event_booking_ms.shared.infrastructure.audit import (
    SYSTEM_CONTEXT,
    AuditContext,
    AuditLogger,
)

logger = get_logger(__name__)


@dataclass
class ProcessPaymentResponse:
    """Payment and booking as committed, plus follow-up intents."""

    payment: Payment
    booking: Booking
    side_effects: list[SideEffect] = field(default_factory=list)


class ProcessPaymentUseCase:
    """
    Use case for settling a pending payment.

    Success: payment completed, booking paid and confirmed, receipt QR
    attached to both. Failure: payment failed, booking payment failed, the
    booking's lifecycle status untouched. Payment and booking are written
    in one transaction.
    """

    def __init__(self, session: AsyncSession, qr_code_generator: QRCodeGeneratorPort) -> None:
        self._session = session
        self._qr_code_generator = qr_code_generator
        self._bookings = BookingRepository(session)
        self._payments = PaymentRepository(session)
        self._audit = AuditLogger(session)

    async def execute(
        self,
        payment_id: UUID,
        simulate_success: bool = True,
        audit_context: AuditContext = SYSTEM_CONTEXT,
    ) -> ProcessPaymentResponse:
        async with self._session.begin():
            payment = await self._payments.get_by_id(payment_id, for_update=True)
            if payment is None:
                raise PaymentNotFoundError(payment_id)

            if not payment.is_pending():
                raise PaymentAlreadyProcessedError(payment.id, payment.status.value)

            booking = await self._bookings.get_by_id(payment.booking_id, for_update=True)
            if booking is None:
                raise BookingNotFoundError(payment.booking_id)

            if simulate_success:
                qr_code_url = await self._generate_qr_code(payment)
                payment.mark_completed(qr_code_url)
                booking.mark_paid(payment.transaction_id, qr_code_url)
            else:
                payment.mark_failed()
                booking.mark_payment_failed()

            # The status guard in the UPDATE settles concurrent calls
            if not await self._payments.transition_status(
                payment.id,
                expected=PaymentStatus.PENDING,
                new_status=payment.status,
                qr_code_url=payment.qr_code_url,
            ):
                raise PaymentAlreadyProcessedError(payment.id, "processed concurrently")

            await self._bookings.save_payment_result(booking)

            await self._audit.record(
                "process_payment",
                "payment",
                payment.id,
                audit_context,
                {"simulateSuccess": simulate_success, "status": payment.status.value},
            )

        if simulate_success:
            logger.info("Payment %s processed successfully", payment.id)
            side_effects = notify_booking_owner(
                booking,
                "payment_completed",
                "Payment completed successfully",
                {"paymentId": str(payment.id), "bookingId": str(booking.id)},
            )
            side_effects.append(SendPaymentReceipt(payment=payment, booking=booking))
        else:
            logger.info("Payment %s failed", payment.id)
            side_effects = notify_booking_owner(
                booking,
                "payment_failed",
                "Payment failed. Please try again.",
                {"paymentId": str(payment.id)},
            )

        return ProcessPaymentResponse(payment=payment, booking=booking, side_effects=side_effects)

    async def _generate_qr_code(self, payment: Payment) -> str | None:
        """Receipt QR URL, or None when generation fails."""
        try:
            result = await self._qr_code_generator.generate(
                payment.qr_payload(), f"payment_{payment.id}.png"
            )
        except Exception:
            logger.exception("QR code generator raised for payment %s", payment.id)
            return None

        if not result.success:
            logger.warning("No QR code for payment %s: %s", payment.id, result.error)
            return None
        return result.url
