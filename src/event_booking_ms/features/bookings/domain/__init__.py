"""Booking domain entities, enums and pricing."""

from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.bookings.domain.enums import (
    BookingPaymentStatus,
    BookingStatus,
    EventType,
)
from event_booking_ms.features.bookings.domain.pricing import (
    PriceQuote,
    base_price_for_event_type,
    calculate_price,
)

__all__ = [
    "Booking",
    "BookingPaymentStatus",
    "BookingStatus",
    "EventType",
    "PriceQuote",
    "base_price_for_event_type",
    "calculate_price",
]
