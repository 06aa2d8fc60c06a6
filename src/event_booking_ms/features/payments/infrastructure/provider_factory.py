"""QR code generator factory - Dependency injection."""

from functools import lru_cache

from event_booking_ms.features.payments.infrastructure.adapters import (
    SegnoQRCodeAdapter,
)
from event_booking_ms.shared.core.settings import get_settings


@lru_cache
def get_qr_code_generator() -> SegnoQRCodeAdapter:
    """
    Get the QR code generator configured for this deployment.

    Factory function for dependency injection.
    """
    settings = get_settings()
    return SegnoQRCodeAdapter(settings.qr_code_dir, settings.qr_code_url_prefix)
