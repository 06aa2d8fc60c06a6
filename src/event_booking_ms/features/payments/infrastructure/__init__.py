"""Payment infrastructure module."""

from event_booking_ms.features.payments.infrastructure.adapters import (
    SegnoQRCodeAdapter,
)
from event_booking_ms.features.payments.infrastructure.repository import (
    PaymentRepository,
)

__all__ = ["SegnoQRCodeAdapter", "PaymentRepository"]
