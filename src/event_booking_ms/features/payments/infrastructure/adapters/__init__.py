"""Payment infrastructure adapters."""

from event_booking_ms.features.payments.infrastructure.adapters.qr_code_adapter import (
    SegnoQRCodeAdapter,
)

__all__ = ["SegnoQRCodeAdapter"]
