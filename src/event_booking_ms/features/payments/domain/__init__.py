"""Payment domain entities and value objects."""

from event_booking_ms.features.payments.domain.entities import Payment
from event_booking_ms.features.payments.domain.enums import (
    Currency,
    PaymentMethod,
    PaymentStatus,
)
from event_booking_ms.features.payments.domain.instructions import (
    PaymentInstructions,
    get_payment_instructions,
)

__all__ = [
    "Payment",
    "PaymentStatus",
    "PaymentMethod",
    "Currency",
    "PaymentInstructions",
    "get_payment_instructions",
]
