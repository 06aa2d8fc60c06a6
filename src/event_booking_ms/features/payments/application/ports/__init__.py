"""Payment application ports."""

from event_booking_ms.features.payments.application.ports.qr_code_port import (
    QRCodeGeneratorPort,
    QRCodeResult,
)

__all__ = ["QRCodeGeneratorPort", "QRCodeResult"]
