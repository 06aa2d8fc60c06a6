"""Booking domain entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any
from uuid import UUID, uuid4

from event_booking_ms.features.bookings.domain.enums import (
    BookingPaymentStatus,
    BookingStatus,
    EventType,
)
from event_booking_ms.shared.domain.clock import utcnow


@dataclass
class Booking:
    """A customer's request for an event, with a captured price."""

    id: UUID
    customer_name: str
    customer_email: str
    customer_phone: str
    event_type: EventType
    event_date: date
    event_time: str
    guest_count: int
    price_calculated: int
    status: BookingStatus = BookingStatus.PENDING
    payment_status: BookingPaymentStatus = BookingPaymentStatus.UNPAID

    user_id: UUID | None = None
    service_id: UUID | None = None
    service_snapshot: dict[str, Any] | None = None
    message: str | None = None

    qr_code_url: str | None = None
    transaction_id: str | None = None

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        customer_name: str,
        customer_email: str,
        customer_phone: str,
        event_type: EventType,
        event_date: date,
        event_time: str,
        guest_count: int,
        price_calculated: int,
        user_id: UUID | None = None,
        service_id: UUID | None = None,
        service_snapshot: dict[str, Any] | None = None,
        message: str | None = None,
    ) -> "Booking":
        """Create a new pending, unpaid booking."""
        return cls(
            id=uuid4(),
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            event_type=event_type,
            event_date=event_date,
            event_time=event_time,
            guest_count=guest_count,
            price_calculated=price_calculated,
            user_id=user_id,
            service_id=service_id,
            service_snapshot=service_snapshot,
            message=message,
        )

    def can_start_payment(self) -> bool:
        return self.payment_status == BookingPaymentStatus.UNPAID

    def is_paid(self) -> bool:
        return self.payment_status == BookingPaymentStatus.PAID

    def mark_paid(self, transaction_id: str | None, qr_code_url: str | None) -> None:
        """Payment settled: the booking is confirmed."""
        self.payment_status = BookingPaymentStatus.PAID
        self.status = BookingStatus.CONFIRMED
        self.transaction_id = transaction_id
        if qr_code_url:
            self.qr_code_url = qr_code_url
        self.updated_at = utcnow()

    def mark_payment_failed(self) -> None:
        """Payment failed; lifecycle status is left as is."""
        self.payment_status = BookingPaymentStatus.FAILED
        self.updated_at = utcnow()
