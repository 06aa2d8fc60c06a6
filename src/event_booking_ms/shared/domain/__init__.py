"""Shared domain module - Exceptions and types."""

from event_booking_ms.shared.domain.exceptions import (
    AccessDeniedError,
    BookingAlreadyPaidError,
    BookingNotFoundError,
    BookingStatusConflictError,
    ConflictError,
    EventBookingError,
    NotFoundError,
    NotificationNotFoundError,
    PaymentAlreadyProcessedError,
    PaymentNotFoundError,
    ServiceNotFoundError,
    ValidationFailedError,
)

__all__ = [
    "AccessDeniedError",
    "BookingAlreadyPaidError",
    "BookingNotFoundError",
    "BookingStatusConflictError",
    "ConflictError",
    "EventBookingError",
    "NotFoundError",
    "NotificationNotFoundError",
    "PaymentAlreadyProcessedError",
    "PaymentNotFoundError",
    "ServiceNotFoundError",
    "ValidationFailedError",
]
