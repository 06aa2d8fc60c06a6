"""ORM models for SQLAlchemy.

Each model maps one table and converts to and from its domain entity.
Status columns are plain strings holding the enum values.
"""

from typing import Any
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Uuid,
    func,
)

from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.bookings.domain.enums import (
    BookingPaymentStatus,
    BookingStatus,
    EventType,
)
from event_booking_ms.features.notifications.domain.entities import (
    Notification,
    NotificationAudience,
)
from event_booking_ms.features.payments.domain.entities import Payment
from event_booking_ms.features.payments.domain.enums import (
    Currency,
    PaymentMethod,
    PaymentStatus,
)
from event_booking_ms.features.services.domain.entities import Service, ServiceStatus
from event_booking_ms.shared.domain.clock import utcnow
from event_booking_ms.shared.infrastructure.database.connection import Base


def _value(enum_or_str: Any) -> str:
    return enum_or_str.value if hasattr(enum_or_str, "value") else str(enum_or_str)


class ServiceModel(Base):
    """Service catalog ORM model."""

    __tablename__ = "services"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Integer, nullable=False)
    category = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default=ServiceStatus.ACTIVE.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def to_domain(self) -> Service:
        return Service(
            id=self.id,
            name=self.name,
            price=self.price,
            category=self.category,
            status=ServiceStatus(self.status),
            description=self.description,
            created_at=self.created_at or utcnow(),
            updated_at=self.updated_at or utcnow(),
        )

    @classmethod
    def from_domain(cls, service: Service) -> "ServiceModel":
        return cls(
            id=service.id,
            name=service.name,
            description=service.description,
            price=service.price,
            category=service.category,
            status=_value(service.status),
            created_at=service.created_at,
            updated_at=service.updated_at,
        )


class BookingModel(Base):
    """
    Booking ORM model.

    Holds two independent status dimensions:
    - status: pending | confirmed | cancelled | completed
    - payment_status: unpaid | processing | paid | failed
    """

    __tablename__ = "bookings"

    id = Column(Uuid, primary_key=True, default=uuid4)
    user_id = Column(Uuid, nullable=True, index=True)

    customer_name = Column(String(100), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(20), nullable=False)

    service_id = Column(Uuid, ForeignKey("services.id"), nullable=True)
    service_snapshot = Column(JSON, nullable=True)

    event_type = Column(String(20), nullable=False)
    event_date = Column(Date, nullable=False)
    event_time = Column(String(5), nullable=False)
    guest_count = Column(Integer, nullable=False)
    message = Column(Text, nullable=True)

    price_calculated = Column(Integer, nullable=False)

    status = Column(String(20), nullable=False, default=BookingStatus.PENDING.value)
    payment_status = Column(
        String(20), nullable=False, default=BookingPaymentStatus.UNPAID.value
    )

    qr_code_url = Column(String(255), nullable=True)
    transaction_id = Column(String(64), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def to_domain(self) -> Booking:
        return Booking(
            id=self.id,
            customer_name=self.customer_name,
            customer_email=self.customer_email,
            customer_phone=self.customer_phone,
            event_type=EventType(self.event_type),
            event_date=self.event_date,
            event_time=self.event_time,
            guest_count=self.guest_count,
            price_calculated=self.price_calculated,
            status=BookingStatus(self.status),
            payment_status=BookingPaymentStatus(self.payment_status),
            user_id=self.user_id,
            service_id=self.service_id,
            service_snapshot=self.service_snapshot,
            message=self.message,
            qr_code_url=self.qr_code_url,
            transaction_id=self.transaction_id,
            created_at=self.created_at or utcnow(),
            updated_at=self.updated_at or utcnow(),
        )

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingModel":
        return cls(
            id=booking.id,
            user_id=booking.user_id,
            customer_name=booking.customer_name,
            customer_email=booking.customer_email,
            customer_phone=booking.customer_phone,
            service_id=booking.service_id,
            service_snapshot=booking.service_snapshot,
            event_type=_value(booking.event_type),
            event_date=booking.event_date,
            event_time=booking.event_time,
            guest_count=booking.guest_count,
            message=booking.message,
            price_calculated=booking.price_calculated,
            status=_value(booking.status),
            payment_status=_value(booking.payment_status),
            qr_code_url=booking.qr_code_url,
            transaction_id=booking.transaction_id,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


class PaymentModel(Base):
    """Payment ORM model. One row per payment attempt."""

    __tablename__ = "payments"

    id = Column(Uuid, primary_key=True, default=uuid4)
    booking_id = Column(Uuid, ForeignKey("bookings.id"), nullable=False, index=True)

    amount = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False, default=Currency.ETB.value)
    payment_method = Column(String(20), nullable=False)
    phone_number = Column(String(20), nullable=True)

    transaction_id = Column(String(64), nullable=True, unique=True, index=True)
    status = Column(String(20), nullable=False, default=PaymentStatus.PENDING.value)

    # "metadata" is reserved on declarative classes
    payment_metadata = Column("metadata", JSON, nullable=True, default=dict)
    qr_code_url = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def to_domain(self) -> Payment:
        return Payment(
            id=self.id,
            booking_id=self.booking_id,
            amount=self.amount,
            currency=Currency(self.currency or Currency.ETB.value),
            payment_method=PaymentMethod(self.payment_method),
            status=PaymentStatus(self.status),
            phone_number=self.phone_number,
            transaction_id=self.transaction_id,
            qr_code_url=self.qr_code_url,
            metadata=self.payment_metadata or {},
            created_at=self.created_at or utcnow(),
            updated_at=self.updated_at or utcnow(),
        )

    @classmethod
    def from_domain(cls, payment: Payment) -> "PaymentModel":
        return cls(
            id=payment.id,
            booking_id=payment.booking_id,
            amount=payment.amount,
            currency=_value(payment.currency),
            payment_method=_value(payment.payment_method),
            phone_number=payment.phone_number,
            transaction_id=payment.transaction_id,
            status=_value(payment.status),
            payment_metadata=payment.metadata,
            qr_code_url=payment.qr_code_url,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )


class NotificationModel(Base):
    """In-app notification ORM model."""

    __tablename__ = "notifications"

    id = Column(Uuid, primary_key=True, default=uuid4)
    user_id = Column(Uuid, nullable=True, index=True)
    audience = Column(String(10), nullable=False, default=NotificationAudience.USER.value)
    kind = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)
    data = Column(JSON, nullable=True, default=dict)
    is_read = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def to_domain(self) -> Notification:
        return Notification(
            id=self.id,
            audience=NotificationAudience(self.audience),
            kind=self.kind,
            message=self.message,
            user_id=self.user_id,
            data=self.data or {},
            is_read=bool(self.is_read),
            created_at=self.created_at or utcnow(),
        )

    @classmethod
    def from_domain(cls, notification: Notification) -> "NotificationModel":
        return cls(
            id=notification.id,
            user_id=notification.user_id,
            audience=_value(notification.audience),
            kind=notification.kind,
            message=notification.message,
            data=notification.data,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )


class AuditLogModel(Base):
    """Append-only audit trail of mutating operations."""

    __tablename__ = "audit_logs"

    id = Column(Uuid, primary_key=True, default=uuid4)
    user_id = Column(Uuid, nullable=True, index=True)
    action = Column(String(50), nullable=False, index=True)
    resource_type = Column(String(50), nullable=False)
    resource_id = Column(String(64), nullable=True)
    ip = Column(String(64), nullable=True)
    user_agent = Column(String(255), nullable=True)
    data = Column(JSON, nullable=True, default=dict)

    created_at = Column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
