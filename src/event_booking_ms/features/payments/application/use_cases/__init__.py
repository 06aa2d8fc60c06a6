"""Payment use cases."""

from event_booking_ms.features.payments.application.use_cases.create_payment import (
    CreatePaymentUseCase,
    CreatePaymentRequest,
    CreatePaymentResponse,
)
from event_booking_ms.features.payments.application.use_cases.handle_webhook import (
    HandlePaymentWebhookUseCase,
    WebhookOutcome,
    WebhookPayload,
)
from event_booking_ms.features.payments.application.use_cases.process_payment import (
    ProcessPaymentUseCase,
    ProcessPaymentResponse,
)

__all__ = [
    "CreatePaymentUseCase",
    "CreatePaymentRequest",
    "CreatePaymentResponse",
    "HandlePaymentWebhookUseCase",
    "WebhookOutcome",
    "WebhookPayload",
    "ProcessPaymentUseCase",
    "ProcessPaymentResponse",
]
