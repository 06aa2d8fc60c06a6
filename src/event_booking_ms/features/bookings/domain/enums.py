"""Booking domain enums."""

from enum import Enum


class BookingStatus(str, Enum):
    """Lifecycle status of a booking."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class BookingPaymentStatus(str, Enum):
    """Payment status of a booking: unpaid -> processing -> paid | failed."""

    UNPAID = "unpaid"
    PROCESSING = "processing"
    PAID = "paid"
    FAILED = "failed"


class EventType(str, Enum):
    """Event types offered by the platform."""

    WEDDING = "wedding"
    BIRTHDAY = "birthday"
    CORPORATE = "corporate"
    OTHER = "other"
