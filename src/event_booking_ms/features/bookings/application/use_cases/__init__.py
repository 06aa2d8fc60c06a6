"""Booking use cases."""

from event_booking_ms.features.bookings.application.use_cases.calculate_price import (
    BookingQuote,
    CalculatePriceUseCase,
    quote_booking,
)
from event_booking_ms.features.bookings.application.use_cases.create_booking import (
    CreateBookingRequest,
    CreateBookingResponse,
    CreateBookingUseCase,
)
from event_booking_ms.features.bookings.application.use_cases.update_booking_status import (
    UpdateBookingStatusResponse,
    UpdateBookingStatusUseCase,
    parse_booking_status,
)

__all__ = [
    "BookingQuote",
    "CalculatePriceUseCase",
    "quote_booking",
    "CreateBookingRequest",
    "CreateBookingResponse",
    "CreateBookingUseCase",
    "UpdateBookingStatusResponse",
    "UpdateBookingStatusUseCase",
    "parse_booking_status",
]
