"""Booking DTOs for API requests/responses."""

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from event_booking_ms.features.bookings.application.use_cases import BookingQuote
from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.bookings.domain.enums import (
    BookingPaymentStatus,
    BookingStatus,
    EventType,
)
from event_booking_ms.features.payments.domain.enums import Currency
from event_booking_ms.shared.domain.clock import utcnow

EVENT_TIME_PATTERN = r"^([01]?\d|2[0-3]):[0-5]\d$"


class PriceQuoteRequest(BaseModel):
    """Request for a price quote."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"eventType": "wedding", "guestCount": 150}},
    )

    event_type: EventType = Field(..., alias="eventType")
    guest_count: int = Field(..., alias="guestCount", ge=1, le=1000)
    service_id: UUID | None = Field(None, alias="serviceId")


class ServiceSummary(BaseModel):
    id: UUID
    name: str
    price: int
    category: str


class PriceQuoteResponse(BaseModel):
    base_price: int
    guest_count: int
    guest_factor: float
    total_price: int
    currency: Currency = Currency.ETB
    event_type: str
    service: ServiceSummary | None = None

    @classmethod
    def from_quote(cls, priced: BookingQuote) -> "PriceQuoteResponse":
        service = priced.service
        return cls(
            base_price=priced.quote.base_price,
            guest_count=priced.quote.guest_count,
            guest_factor=float(priced.quote.guest_factor),
            total_price=priced.quote.total_price,
            event_type=priced.event_type,
            service=(
                ServiceSummary(
                    id=service.id,
                    name=service.name,
                    price=service.price,
                    category=service.category,
                )
                if service
                else None
            ),
        )


class BookingCreateRequest(BaseModel):
    """Request to create a booking. The price is always computed server side."""

    # Allow both camelCase (customerName) and snake_case (customer_name)
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "customerName": "Abebe Kebede",
                "customerEmail": "abebe@example.com",
                "customerPhone": "0911223344",
                "eventType": "wedding",
                "eventDate": "2030-06-15",
                "eventTime": "14:30",
                "guestCount": 150,
            }
        },
    )

    customer_name: str = Field(..., alias="customerName", min_length=2, max_length=100)
    customer_email: EmailStr = Field(..., alias="customerEmail")
    customer_phone: str = Field(..., alias="customerPhone", min_length=10, max_length=15)
    event_type: EventType = Field(..., alias="eventType")
    event_date: date = Field(..., alias="eventDate")
    event_time: str = Field(..., alias="eventTime", pattern=EVENT_TIME_PATTERN)
    guest_count: int = Field(..., alias="guestCount", ge=1, le=1000)
    service_id: UUID | None = Field(None, alias="serviceId")
    message: str | None = Field(None, max_length=1000)

    @field_validator("customer_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("event_date")
    @classmethod
    def not_in_past(cls, v: date) -> date:
        if v < utcnow().date():
            raise ValueError("Event date cannot be in the past")
        return v


class BookingStatusUpdateRequest(BaseModel):
    status: str = Field(..., description="pending, confirmed, cancelled or completed")


class BookingResponse(BaseModel):
    """Full booking response."""

    id: UUID
    user_id: UUID | None = None
    customer_name: str
    customer_email: str
    customer_phone: str
    service_id: UUID | None = None
    service_snapshot: dict[str, Any] | None = None
    event_type: EventType
    event_date: date
    event_time: str
    guest_count: int
    message: str | None = None
    price_calculated: int
    status: BookingStatus
    payment_status: BookingPaymentStatus
    qr_code_url: str | None = None
    transaction_id: str | None = None

    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            customer_name=booking.customer_name,
            customer_email=booking.customer_email,
            customer_phone=booking.customer_phone,
            service_id=booking.service_id,
            service_snapshot=booking.service_snapshot,
            event_type=booking.event_type,
            event_date=booking.event_date,
            event_time=booking.event_time,
            guest_count=booking.guest_count,
            message=booking.message,
            price_calculated=booking.price_calculated,
            status=booking.status,
            payment_status=booking.payment_status,
            qr_code_url=booking.qr_code_url,
            transaction_id=booking.transaction_id,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )
