"""Booking use case - Create booking."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.bookings.application.use_cases.calculate_price import (
    quote_booking,
)
from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.bookings.domain.enums import EventType
from event_booking_ms.features.bookings.infrastructure.repository import (
    BookingRepository,
)
from event_booking_ms.features.notifications.application.side_effects import (
    NotifyAdmins,
    SendBookingConfirmation,
    SideEffect,
)
from event_booking_ms.features.services.infrastructure.repository import (
    ServiceRepository,
)
from event_booking_ms.shared.core.logging import get_logger
from event_booking_ms.shared.infrastructure.audit import (
    SYSTEM_CONTEXT,
    AuditContext,
    AuditLogger,
)

logger = get_logger(__name__)


@dataclass
class CreateBookingRequest:
    """Request to create a booking."""

    customer_name: str
    customer_email: str
    customer_phone: str
    event_type: EventType
    event_date: date
    event_time: str
    guest_count: int
    service_id: Optional[UUID] = None
    message: Optional[str] = None
    user_id: Optional[UUID] = None
    audit_context: AuditContext = SYSTEM_CONTEXT


@dataclass
class CreateBookingResponse:
    """Response from creating a booking."""

    booking: Booking
    side_effects: list[SideEffect] = field(default_factory=list)


class CreateBookingUseCase:
    """
    Use case for creating a booking.

    The price is calculated here, never taken from the client, and the
    chosen service is captured as a snapshot.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._bookings = BookingRepository(session)
        self._services = ServiceRepository(session)
        self._audit = AuditLogger(session)

    async def execute(self, request: CreateBookingRequest) -> CreateBookingResponse:
        async with self._session.begin():
            priced = await quote_booking(
                self._services,
                request.event_type.value,
                request.guest_count,
                request.service_id,
            )

            booking = await self._bookings.create(
                Booking.create(
                    customer_name=request.customer_name,
                    customer_email=request.customer_email,
                    customer_phone=request.customer_phone,
                    event_type=request.event_type,
                    event_date=request.event_date,
                    event_time=request.event_time,
                    guest_count=request.guest_count,
                    price_calculated=priced.quote.total_price,
                    user_id=request.user_id,
                    service_id=priced.service.id if priced.service else None,
                    service_snapshot=priced.service.snapshot() if priced.service else None,
                    message=request.message,
                )
            )

            await self._audit.record(
                "create_booking",
                "booking",
                booking.id,
                request.audit_context,
                {
                    "eventType": booking.event_type.value,
                    "guestCount": booking.guest_count,
                    "priceCalculated": booking.price_calculated,
                },
            )

        logger.info(
            "Booking %s created (%s, %s guests, %s ETB)",
            booking.id,
            booking.event_type.value,
            booking.guest_count,
            booking.price_calculated,
        )

        return CreateBookingResponse(
            booking=booking,
            side_effects=[
                NotifyAdmins(
                    "booking_created",
                    f"New booking created by {booking.customer_name}",
                    {"bookingId": str(booking.id)},
                ),
                SendBookingConfirmation(booking=booking),
            ],
        )
