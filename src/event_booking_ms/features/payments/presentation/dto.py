"""Payment DTOs for API requests/responses."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from event_booking_ms.features.bookings.domain.enums import (
    BookingPaymentStatus,
    BookingStatus,
)
from event_booking_ms.features.payments.domain.entities import Payment
from event_booking_ms.features.payments.domain.enums import (
    Currency,
    PaymentMethod,
    PaymentStatus,
)
from event_booking_ms.features.payments.domain.instructions import PaymentInstructions


class PaymentCreateRequest(BaseModel):
    """Request to proceed to payment for a booking."""

    # Allow both camelCase (paymentMethod) and snake_case (payment_method)
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"paymentMethod": "telebirr", "phoneNumber": "0911223344"}
        },
    )

    payment_method: PaymentMethod = Field(
        ..., alias="paymentMethod", description="Payment channel"
    )
    phone_number: str | None = Field(
        None,
        alias="phoneNumber",
        min_length=10,
        max_length=15,
        description="Payer phone number for mobile money",
    )


class PaymentProcessRequest(BaseModel):
    """Admin request to settle a pending payment."""

    model_config = ConfigDict(populate_by_name=True)

    simulate_success: bool = Field(True, alias="simulateSuccess")


class PaymentResponse(BaseModel):
    """Full payment response."""

    id: UUID
    booking_id: UUID
    amount: int
    currency: Currency
    payment_method: PaymentMethod
    status: PaymentStatus
    phone_number: str | None = None
    transaction_id: str | None = None
    qr_code_url: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentResponse":
        return cls(
            id=payment.id,
            booking_id=payment.booking_id,
            amount=payment.amount,
            currency=payment.currency,
            payment_method=payment.payment_method,
            status=payment.status,
            phone_number=payment.phone_number,
            transaction_id=payment.transaction_id,
            qr_code_url=payment.qr_code_url,
            metadata=payment.metadata,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )


class PaymentInstructionsResponse(BaseModel):
    title: str
    steps: list[str]
    note: str

    @classmethod
    def from_instructions(cls, instructions: PaymentInstructions) -> "PaymentInstructionsResponse":
        return cls(
            title=instructions.title,
            steps=list(instructions.steps),
            note=instructions.note,
        )


class ProceedPaymentResponse(BaseModel):
    """A freshly created payment with what the payer has to do next."""

    payment: PaymentResponse
    instructions: PaymentInstructionsResponse


class PaymentProcessResponse(BaseModel):
    """Outcome of settling a payment."""

    payment: PaymentResponse
    booking_id: UUID
    booking_status: BookingStatus
    booking_payment_status: BookingPaymentStatus
