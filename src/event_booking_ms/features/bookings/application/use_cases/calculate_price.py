"""Booking use case - Price quote."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.bookings.domain.pricing import (
    PriceQuote,
    base_price_for_event_type,
    calculate_price,
)
from event_booking_ms.features.services.domain.entities import Service
from event_booking_ms.features.services.infrastructure.repository import (
    ServiceRepository,
)
from event_booking_ms.shared.domain.exceptions import ServiceNotFoundError


@dataclass
class BookingQuote:
    """A price quote together with what it was priced from."""

    event_type: str
    quote: PriceQuote
    service: Optional[Service] = None


async def quote_booking(
    services: ServiceRepository,
    event_type: str,
    guest_count: int,
    service_id: Optional[UUID] = None,
) -> BookingQuote:
    """
    Price an event.

    The base price comes from the chosen service when there is one, from
    the event type otherwise. Booking creation goes through here as well.
    """
    service = None
    if service_id is not None:
        service = await services.get_active(service_id)
        if service is None:
            raise ServiceNotFoundError(service_id)
        base_price = service.price
    else:
        base_price = base_price_for_event_type(event_type)

    return BookingQuote(
        event_type=event_type,
        quote=calculate_price(base_price, guest_count),
        service=service,
    )


class CalculatePriceUseCase:
    """Use case for quoting a booking without creating it."""

    def __init__(self, session: AsyncSession) -> None:
        self._services = ServiceRepository(session)

    async def execute(
        self, event_type: str, guest_count: int, service_id: Optional[UUID] = None
    ) -> BookingQuote:
        return await quote_booking(self._services, event_type, guest_count, service_id)
