"""Payment domain entity."""

import secrets
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from event_booking_ms.features.payments.domain.enums import (
    Currency,
    PaymentMethod,
    PaymentStatus,
)
from event_booking_ms.shared.domain.clock import utcnow


def generate_transaction_id() -> str:
    """Opaque, uppercased transaction reference handed to the payer."""
    return secrets.token_hex(8).upper()


@dataclass
class Payment:
    """One attempt to settle a booking's price."""

    id: UUID
    booking_id: UUID
    amount: int
    payment_method: PaymentMethod
    status: PaymentStatus
    currency: Currency = Currency.ETB

    phone_number: str | None = None
    transaction_id: str | None = None
    qr_code_url: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        booking_id: UUID,
        amount: int,
        payment_method: PaymentMethod,
        phone_number: str | None = None,
    ) -> "Payment":
        """Create a new payment in pending status."""
        if amount < 0:
            raise ValueError("Payment amount must not be negative")

        return cls(
            id=uuid4(),
            booking_id=booking_id,
            amount=amount,
            payment_method=payment_method,
            status=PaymentStatus.PENDING,
            phone_number=phone_number,
            transaction_id=generate_transaction_id(),
        )

    def is_pending(self) -> bool:
        return self.status == PaymentStatus.PENDING

    def mark_completed(self, qr_code_url: str | None = None) -> None:
        """Mark payment as completed."""
        self.status = PaymentStatus.COMPLETED
        if qr_code_url:
            self.qr_code_url = qr_code_url
        self.updated_at = utcnow()

    def mark_failed(self) -> None:
        """Mark payment as failed."""
        self.status = PaymentStatus.FAILED
        self.updated_at = utcnow()

    def qr_payload(self, on: datetime | None = None) -> dict[str, Any]:
        """Data encoded into the receipt QR code."""
        return {
            "amount": self.amount,
            "paymentMethod": self.payment_method.value,
            "phoneNumber": self.phone_number,
            "transactionId": self.transaction_id,
            "date": (on or utcnow()).date().isoformat(),
        }
