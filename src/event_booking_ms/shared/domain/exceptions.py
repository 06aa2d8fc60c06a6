"""Domain exceptions for the Event Booking Service."""

from typing import Any


class EventBookingError(Exception):
    """Base exception for booking and payment errors."""

    pass


class NotFoundError(EventBookingError):
    """Raised when a requested resource does not exist."""

    resource = "Resource"

    def __init__(self, resource_id: Any, message: str | None = None) -> None:
        self.resource_id = str(resource_id)
        super().__init__(
            message or f"{self.resource} with ID '{self.resource_id}' not found"
        )


class BookingNotFoundError(NotFoundError):
    """Raised when a booking is not found."""

    resource = "Booking"


class PaymentNotFoundError(NotFoundError):
    """Raised when a payment is not found."""

    resource = "Payment"


class ServiceNotFoundError(NotFoundError):
    """Raised when a catalog service is missing or inactive."""

    resource = "Service"

    def __init__(self, service_id: Any) -> None:
        super().__init__(
            service_id, f"Service with ID '{service_id}' not found or inactive"
        )


class NotificationNotFoundError(NotFoundError):
    """Raised when a notification is not found for the caller."""

    resource = "Notification"


class ConflictError(EventBookingError):
    """Raised when a state transition is not allowed."""

    pass


class BookingAlreadyPaidError(ConflictError):
    """Raised when a payment is requested for a booking that is not unpaid."""

    def __init__(self, booking_id: Any, payment_status: str) -> None:
        self.booking_id = str(booking_id)
        self.payment_status = payment_status
        super().__init__(
            f"Payment already processed for booking '{self.booking_id}' "
            f"(payment status '{payment_status}')"
        )


class PaymentAlreadyProcessedError(ConflictError):
    """Raised when trying to process an already processed payment."""

    def __init__(self, payment_id: Any, status: str) -> None:
        self.payment_id = str(payment_id)
        self.status = status
        super().__init__(
            f"Payment '{self.payment_id}' is already processed (status '{status}')"
        )


class BookingStatusConflictError(ConflictError):
    """Raised when a lifecycle status requires a paid booking."""

    def __init__(self, booking_id: Any, status: str, payment_status: str) -> None:
        self.booking_id = str(booking_id)
        super().__init__(
            f"Booking '{self.booking_id}' cannot be {status} "
            f"while its payment status is '{payment_status}'"
        )


class ValidationFailedError(EventBookingError):
    """Raised when input fails validation, with field-level detail."""

    def __init__(
        self, message: str = "Validation failed", errors: list[dict[str, str]] | None = None
    ) -> None:
        self.errors = errors or []
        super().__init__(message)


class AccessDeniedError(EventBookingError):
    """Raised when the caller may not access a resource."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)
